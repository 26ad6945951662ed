"""Read and check companion pom files using lxml."""

from __future__ import annotations

import re
from pathlib import Path

from lxml import etree

from nar_mvn.exceptions import PomModelError, PomNotFoundError, PomParseError
from nar_mvn.models import GAV, ArtifactDescriptor


_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")


def _project_text(root: etree._Element, *path: str) -> str | None:
    """Text of ``project/<path...>``, matched by local name so namespaces do not matter."""
    expr = "/*[local-name()='project']" + "".join(f"/*[local-name()='{p}']" for p in path)
    found = root.xpath(expr)
    if not found:
        return None
    return (found[0].text or "").strip() or None


def _load(path: Path) -> etree._Element:
    if not path.exists():
        raise PomNotFoundError(f"pom not found: {path}")
    try:
        parser = etree.XMLParser(resolve_entities=False, no_network=True, recover=False)
        return etree.parse(str(path), parser=parser).getroot()
    except (OSError, etree.XMLSyntaxError) as exc:
        raise PomParseError(f"Failed to parse pom: {path}") from exc


def _properties(root: etree._Element, gav: dict[str, str]) -> dict[str, str]:
    props = {
        etree.QName(n).localname: (n.text or "").strip()
        for n in root.xpath("/*[local-name()='project']/*[local-name()='properties']/*")
        if isinstance(n, etree._Element)
    }
    for key, value in gav.items():
        props[f"project.{key}"] = props[f"pom.{key}"] = value
    return props


def _interpolate(value: str, props: dict[str, str]) -> str:
    # A few passes cover properties defined in terms of other properties.
    for _ in range(5):
        nxt = _PLACEHOLDER_RE.sub(lambda m: props.get(m.group(1)) or m.group(0), value)
        if nxt == value:
            break
        value = nxt
    return value


def parse_pom(path: str | Path) -> GAV:
    """Read the coordinates a pom declares.

    GroupId and version fall back to <parent>; ``${...}`` placeholders are
    resolved from <properties> and the project's own coordinates.

    Raises:
        PomNotFoundError: If the file does not exist.
        PomParseError: If XML cannot be parsed.
        PomModelError: If required fields are missing.
    """
    pom_path = Path(path)
    root = _load(pom_path)

    artifact_id = _project_text(root, "artifactId")
    group_id = _project_text(root, "groupId") or _project_text(root, "parent", "groupId")
    version = _project_text(root, "version") or _project_text(root, "parent", "version")
    if artifact_id is None or group_id is None or version is None:
        raise PomModelError(f"Missing groupId, artifactId or version in {pom_path}")

    props = _properties(root, {"groupId": group_id, "artifactId": artifact_id, "version": version})
    return GAV(
        group_id=_interpolate(group_id, props),
        artifact_id=artifact_id,
        version=_interpolate(version, props),
    )


def resolve_companion_pom(artifact: ArtifactDescriptor) -> ArtifactDescriptor:
    """Return the artifact's companion pom descriptor after checking the pom on disk.

    Raises:
        PomNotFoundError: If no pom sits next to the artifact's file.
        PomParseError: If the pom cannot be parsed.
        PomModelError: If the pom describes a different groupId or artifactId.
    """
    pom = artifact.pom()
    declared = parse_pom(pom.file)
    if (declared.group_id, declared.artifact_id) != (artifact.group_id, artifact.artifact_id):
        raise PomModelError(
            f"Pom {pom.file} describes {declared.compact()}, expected "
            f"{artifact.group_id}:{artifact.artifact_id}"
        )
    return pom
