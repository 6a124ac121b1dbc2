from pathlib import Path
from typing import Union


def load_image_bytes(data: Union[str, bytes, bytearray, Path], media_type: str = "image") -> bytes:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    try:
        path = Path(data)
        if not path.exists():
            raise FileNotFoundError(f"{media_type} file not found: {path}")
        return path.read_bytes()
    except Exception as e:
        raise ValueError(f"Unable to read {media_type} file '{data}': {e}") from e


def display_name(source: Union[str, bytes, bytearray, Path], index: int) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"image_{index + 1}"
    return Path(source).name
