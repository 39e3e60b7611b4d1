from tplname.models import ParsedFilename
from tplname.naming import (
    get_face_type_from_filename,
    get_template_group_id,
    is_valid_template_filename,
    parse_template_filename,
    requires_face_type,
)

__all__ = [
    "ParsedFilename",
    "get_face_type_from_filename",
    "get_template_group_id",
    "is_valid_template_filename",
    "parse_template_filename",
    "requires_face_type",
]
