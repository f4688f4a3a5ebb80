# scriptgen/services/validation.py
from __future__ import annotations

from typing import Any, Dict

from scriptgen.services.file_tree import split_path

def validate_text(s: Any, where: str) -> None:
    if not isinstance(s, str):
        raise ValueError(f"{where} must be string")
    try:
        s.encode("utf-8")
    except UnicodeEncodeError as ex:
        raise ValueError(f"{where} is not valid UTF-8 text") from ex

def validate_file_path(p: Any, where: str) -> None:
    if not isinstance(p, str) or not p.strip():
        raise ValueError(f"{where} invalid")
    validate_text(p, where)

    if p.startswith("/") or p.startswith("\\") or "://" in p:
        raise ValueError(f"{where} must be relative: {p}")

    if ".." in p.replace("\\", "/").split("/"):
        raise ValueError(f"{where} must not contain '..': {p}")

    # "src/", "." and "./" name a folder, not a file
    if p.endswith("/") or p.endswith("\\") or not split_path(p):
        raise ValueError(f"{where} must name a file: {p}")

def validate_model_response(obj: Dict[str, Any]) -> None:
    if not isinstance(obj, dict):
        raise ValueError("Response must be a JSON object")
    if "files" not in obj:
        raise ValueError("Missing field: files")
    if not isinstance(obj["files"], list):
        raise ValueError("files must be array")

    for i, f in enumerate(obj["files"]):
        if not isinstance(f, dict):
            raise ValueError(f"files[{i}] must be object")

        for k in ("name", "content"):
            if k not in f:
                raise ValueError(f"files[{i}] missing {k}")

        validate_file_path(f["name"], f"files[{i}].name")
        validate_text(f["content"], f"files[{i}].content")
