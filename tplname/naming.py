"""模板文件名解析。

文件名编码规则：人群类型_随机5位编码_脸型后缀

- girl_young_hhhh5_n.jpg (窄脸)
- girl_young_hhhh5_w.jpg (宽脸)
- girl_child_abc12.jpg (不区分脸型)

人群类型本身可以包含下划线，因此不能按下划线切分：整个 basename 做锚定匹配，
人群类型贪婪匹配后回溯，让末尾定长的编码和后缀始终落在最右侧。
"""

from __future__ import annotations

import logging
import re

from tplname.constants import (
    FACE_TYPE_BOTH,
    FACE_TYPE_NARROW,
    FACE_TYPE_REQUIRED_GROUPS,
    FACE_TYPE_WIDE,
    PARSE_ERROR_MESSAGE,
    SUFFIX_NARROW,
    SUFFIX_WIDE,
    FaceType,
    FaceTypeSuffix,
)
from tplname.models import ParsedFilename

LOGGER = logging.getLogger(__name__)

EXTENSION_RE = re.compile(r"\.[^.]+\Z")
# re.ASCII 保证 IGNORECASE 下 [a-z] 不会匹配到 Unicode 的大小写折叠字符（如 K 开尔文符号）
WITH_FACE_SUFFIX_RE = re.compile(r"([a-z_]+)_([a-z0-9]{5})_([nw])", re.IGNORECASE | re.ASCII)
WITHOUT_FACE_SUFFIX_RE = re.compile(r"([a-z_]+)_([a-z0-9]{5})", re.IGNORECASE | re.ASCII)

_UNNAMED_GROUP_ID = "unnamed"


def strip_extension(filename: str) -> str:
    return EXTENSION_RE.sub("", filename, count=1)


def face_type_for_suffix(suffix: FaceTypeSuffix | None) -> FaceType:
    if suffix == SUFFIX_NARROW:
        return FACE_TYPE_NARROW
    if suffix == SUFFIX_WIDE:
        return FACE_TYPE_WIDE
    return FACE_TYPE_BOTH


def build_template_group_id(group_type: str, random_code: str) -> str:
    return f"{group_type}_{random_code}".lower()


def _fallback_group_id(basename: str, filename: str) -> str:
    # 纯扩展名（如 ".jpg"）或空串时 basename 为空，组 ID 不能为空
    return basename or filename or _UNNAMED_GROUP_ID


def parse_template_filename(filename: str) -> ParsedFilename:
    """Parse a template filename (with or without extension).

    Never raises: names that do not follow the encoding rule come back with
    ``is_valid=False`` and the basename as their group id.
    """
    basename = strip_extension(filename)

    match = WITH_FACE_SUFFIX_RE.fullmatch(basename)
    if match:
        group_type, random_code, suffix = match.groups()
        face_type_suffix: FaceTypeSuffix | None = SUFFIX_NARROW if suffix.lower() == SUFFIX_NARROW else SUFFIX_WIDE
    else:
        match = WITHOUT_FACE_SUFFIX_RE.fullmatch(basename)
        if not match:
            LOGGER.debug("unparseable template filename: %r", filename)
            return ParsedFilename(
                basename=basename,
                group_type="",
                random_code="",
                face_type_suffix=None,
                face_type=FACE_TYPE_BOTH,
                template_group_id=_fallback_group_id(basename, filename),
                is_valid=False,
                error=PARSE_ERROR_MESSAGE,
            )
        group_type, random_code = match.groups()
        face_type_suffix = None

    return ParsedFilename(
        basename=basename.lower(),
        group_type=group_type.lower(),
        random_code=random_code.lower(),
        face_type_suffix=face_type_suffix,
        face_type=face_type_for_suffix(face_type_suffix),
        template_group_id=build_template_group_id(group_type, random_code),
        is_valid=True,
    )


def is_valid_template_filename(filename: str) -> bool:
    return parse_template_filename(filename).is_valid


def get_template_group_id(filename: str) -> str:
    return parse_template_filename(filename).template_group_id


def get_face_type_from_filename(filename: str) -> FaceType:
    return parse_template_filename(filename).face_type


def requires_face_type(group_type: str | None) -> bool:
    """检查人群类型是否需要区分脸型。"""
    return (group_type or "").lower() in FACE_TYPE_REQUIRED_GROUPS
