# -*- encoding: utf-8 -*-
# @File   : conftest.py
# @Time   : 2026/10/02 19:20:41
# @Author : Kariko Lin

from pathlib import Path

import pytest
import yaml

DATA = Path(__file__).parent / 'data'


def load_battery() -> dict[str, list[dict]]:
    with open(DATA / 'compliance.yaml', 'r', encoding='utf-8') as fp:
        return yaml.safe_load(fp)


def as_plain(doc) -> dict[str, dict[str, str]]:
    """section -> key -> text, in document order."""
    return {
        s.name: {e.key: e.value.text for e in s.entries()}
        for s in doc.sections()
    }


@pytest.fixture
def sample_text() -> str:
    return (
        '# sample\n'
        'title = demo\n'
        '\n'
        '[server]\n'
        'host = example.org\n'
        'port = 8080\n'
        'debug = false\n'
        'ratio = 0.75\n'
        'tags = [web, `a, b`, "x\\ty", [1, 2]]\n'
        'motd = `multi\n'
        'line`\n'
        '\n'
        '[server.tls]\n'
        'enabled = true\n'
    )
