from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from tplname.constants import FACE_TYPE_BOTH, FACE_TYPE_NARROW, FACE_TYPE_WIDE, FaceType
from tplname.models import ParsedFilename
from tplname.naming import parse_template_filename, requires_face_type

LOGGER = logging.getLogger(__name__)

_MATCHABLE_FACE_TYPES = (FACE_TYPE_NARROW, FACE_TYPE_WIDE)


@dataclass(slots=True)
class TemplateGroup:
    """同一 template_group_id 下的宽脸/窄脸/通用模板。

    每种脸型只保留第一个出现的文件，后续同脸型文件记入 duplicates。
    """

    template_group_id: str
    group_type: str
    is_valid: bool
    variants: dict[FaceType, ParsedFilename] = field(default_factory=dict)
    duplicates: list[ParsedFilename] = field(default_factory=list)

    @property
    def requires_face_type(self) -> bool:
        return self.is_valid and requires_face_type(self.group_type)

    def add(self, parsed: ParsedFilename) -> None:
        if parsed.face_type in self.variants:
            self.duplicates.append(parsed)
            return
        self.variants[parsed.face_type] = parsed

    def missing_face_types(self) -> list[FaceType]:
        if self.requires_face_type:
            return [face_type for face_type in _MATCHABLE_FACE_TYPES if face_type not in self.variants]
        if not self.variants:
            return [FACE_TYPE_BOTH]
        return []

    @property
    def is_complete(self) -> bool:
        return not self.missing_face_types()

    def to_dict(self) -> dict[str, Any]:
        return {
            "template_group_id": self.template_group_id,
            "group_type": self.group_type,
            "is_valid": self.is_valid,
            "requires_face_type": self.requires_face_type,
            "variants": {face_type: parsed.basename for face_type, parsed in self.variants.items()},
            "missing": self.missing_face_types(),
            "duplicates": [parsed.basename for parsed in self.duplicates],
        }


def group_parsed(items: Iterable[ParsedFilename]) -> dict[str, TemplateGroup]:
    groups: dict[str, TemplateGroup] = {}
    for parsed in items:
        group = groups.get(parsed.template_group_id)
        if group is None:
            group = TemplateGroup(
                template_group_id=parsed.template_group_id,
                group_type=parsed.group_type,
                is_valid=parsed.is_valid,
            )
            groups[parsed.template_group_id] = group
        group.add(parsed)
    return groups


def group_templates(filenames: Iterable[str]) -> dict[str, TemplateGroup]:
    """Parse ``filenames`` and join them by template group id, first-seen order."""
    return group_parsed(parse_template_filename(name) for name in filenames)


def find_matching_variant(
    group: TemplateGroup,
    source: ParsedFilename,
    target_face_type: str,
) -> ParsedFilename | None:
    """根据用户脸型查找同组内对应的模板版本。

    通用模板或已是目标脸型时直接返回原模板；组内找不到对应版本时返回 None，
    由调用方决定是否降级。
    """
    target = (target_face_type or "").lower()
    if target not in _MATCHABLE_FACE_TYPES:
        raise ValueError(f"target face type must be narrow or wide, got: {target_face_type!r}")

    if source.face_type == FACE_TYPE_BOTH or source.face_type == target:
        return source

    matched = group.variants.get(target)
    if matched is None:
        LOGGER.debug("no %s variant in group %s", target, group.template_group_id)
        return None
    LOGGER.debug("matched %s variant %s in group %s", target, matched.basename, group.template_group_id)
    return matched
