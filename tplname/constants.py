from typing import Literal

FaceTypeSuffix = Literal["n", "w"]
FaceType = Literal["narrow", "wide", "both"]

FACE_TYPE_NARROW: FaceType = "narrow"
FACE_TYPE_WIDE: FaceType = "wide"
FACE_TYPE_BOTH: FaceType = "both"

SUFFIX_NARROW: FaceTypeSuffix = "n"
SUFFIX_WIDE: FaceTypeSuffix = "w"

PARSE_ERROR_MESSAGE = "unable to parse filename format"

# 需要区分宽脸/窄脸版本的人群类型，与文件名语法无关
FACE_TYPE_REQUIRED_GROUPS = frozenset({
    "girl_young",    # 少女
    "woman_mature",  # 熟女
    "woman_elder",   # 奶奶
    "man_young",     # 少男
    "man_elder",     # 大叔
})

UPLOAD_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}

VALID_OUTPUT_FORMATS = {"json", "text"}
