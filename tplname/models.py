from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tplname.constants import FaceType, FaceTypeSuffix


@dataclass(frozen=True, slots=True)
class ParsedFilename:
    """模板文件名解析结果。

    - basename: 去掉扩展名后的文件名；解析成功时转为小写，失败时保持原样
    - group_type: 人群类型代码，如 girl_young；无法解析时为空串
    - random_code: 5 位随机编码；无法解析时为空串
    - face_type_suffix: 文件名中的脸型后缀 n / w，没有则为 None
    - face_type: 数据库脸型值 narrow / wide / both
    - template_group_id: 用于关联宽脸/窄脸版本的模板组 ID
    """

    basename: str
    group_type: str
    random_code: str
    face_type_suffix: FaceTypeSuffix | None
    face_type: FaceType
    template_group_id: str
    is_valid: bool
    error: str | None = None

    @property
    def template_id(self) -> str:
        return self.basename

    def to_dict(self) -> dict[str, Any]:
        return {
            "basename": self.basename,
            "template_id": self.template_id,
            "group_type": self.group_type,
            "random_code": self.random_code,
            "face_type_suffix": self.face_type_suffix,
            "face_type": self.face_type,
            "template_group_id": self.template_group_id,
            "is_valid": self.is_valid,
            "error": self.error,
        }
