from utils.paths import resolve_path
from utils.response_utils import parse_json_text, to_json_text

__all__ = ["resolve_path", "parse_json_text", "to_json_text"]
