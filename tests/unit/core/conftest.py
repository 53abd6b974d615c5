"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_SCRIPT = """\
# Simple Color Preference Script

## You are assisting a client.

1. Ask: **What is your favorite color?**
2. As soon as the user responds, <% function xyz98765-wxyz-4321-lmno-pqrstuvwxyza %>
3. If the response is **red**, <% function abc12345-def6-7890-ghij-klmnopqrstuv %>
"""


@pytest.fixture(name="sample_script")
def sample_script_fixture():
    return SAMPLE_SCRIPT


@pytest.fixture(name="editor_json")
def editor_json_fixture():
    """A tree as the editor's getJSON() returns it."""
    return {
        "type": "doc",
        "content": [
            {"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": "Hi"}]},
            {"type": "paragraph", "content": [
                {"type": "text", "text": "b", "marks": [{"type": "bold"}]},
                {"type": "functionBadge", "attrs": {"functionId": "abc-1"}},
                {"type": "text", "text": "docs", "marks": [{"type": "link", "attrs": {"href": "https://e.com"}}]},
            ]},
            {"type": "codeBlock", "attrs": {"language": "python"}, "content": [{"type": "text", "text": "print(1)"}]},
        ],
    }
