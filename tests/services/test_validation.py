# tests/services/test_validation.py
import re

import pytest

from scriptgen.services.validation import validate_model_response


def test_accepts_well_formed_response():
    validate_model_response({"files": [{"name": "a/b.txt", "content": ""}]})
    validate_model_response({"files": []})


@pytest.mark.parametrize(
    "obj, message",
    [
        ([], "JSON object"),
        ({}, "Missing field: files"),
        ({"files": {"name": "x"}}, "files must be array"),
        ({"files": ["x"]}, "files[0] must be object"),
        ({"files": [{"name": "x"}]}, "files[0] missing content"),
        ({"files": [{"name": "", "content": ""}]}, "files[0].name invalid"),
        ({"files": [{"name": "x", "content": 3}]}, "content must be string"),
        ({"files": [{"name": "/etc/passwd", "content": ""}]}, "must be relative"),
        ({"files": [{"name": "C://x", "content": ""}]}, "must be relative"),
        ({"files": [{"name": "src/../../x", "content": ""}]}, "must not contain '..'"),
        ({"files": [{"name": "src\\..\\x", "content": ""}]}, "must not contain '..'"),
        ({"files": [{"name": ".", "content": ""}]}, "must name a file"),
        ({"files": [{"name": "./", "content": ""}]}, "must name a file"),
        ({"files": [{"name": "src/", "content": "lost"}]}, "must name a file"),
        ({"files": [{"name": "src\\", "content": ""}]}, "must name a file"),
        ({"files": [{"name": "a.txt", "content": "x\ud800y"}]}, "files[0].content is not valid UTF-8"),
        ({"files": [{"name": "\udc00.txt", "content": ""}]}, "files[0].name is not valid UTF-8"),
    ],
)
def test_rejects_malformed_response(obj, message):
    with pytest.raises(ValueError, match=re.escape(message)):
        validate_model_response(obj)
