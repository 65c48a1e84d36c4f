import pytest

from TimeLog.context import infer_method_name, read_code_context, snippet_around

PY_SOURCE = """import os


class Service:
    def authenticate(self, user):
        if user is None:
            return False
        return True
"""

TS_SOURCE = """export class UserService {
    private cache = new Map();

    public async login(email: string): Promise<boolean> {
        if (!email) {
            return false;
        }
        return true;
    }
}

const handler = async (req) => {
    return req;
};
"""


@pytest.mark.parametrize("source, line_index, expected", [
    (PY_SOURCE, 6, "authenticate"),
    (PY_SOURCE, 0, ""),
    (TS_SOURCE, 5, "login"),
    (TS_SOURCE, 12, "handler"),
])
def test_infer_method_name(source, line_index, expected):
    assert infer_method_name(source.splitlines(), line_index) == expected


def test_infer_method_name_skips_control_flow():
    lines = ["function outer(x) {", "    if (x) {", "        run();"]
    assert infer_method_name(lines, 2) == "outer"


def test_infer_method_name_clamps_line_index():
    assert infer_method_name(PY_SOURCE.splitlines(), 999) == "authenticate"
    assert infer_method_name([], 3) == ""


def test_snippet_around_is_bounded():
    text = "a" * 50 + "X" + "b" * 50
    snippet = snippet_around(text, 50, radius=10)
    assert snippet == "a" * 10 + "X" + "b" * 9
    assert snippet_around("short", 2, radius=1000) == "short"


def test_read_code_context(tmp_path):
    path = tmp_path / "service.py"
    path.write_text(PY_SOURCE)
    snippet, method = read_code_context(path, line=7, radius=30)
    assert method == "authenticate"
    assert "return False" in snippet
    assert len(snippet) <= 60


def test_read_code_context_prefers_selection(tmp_path):
    path = tmp_path / "service.py"
    path.write_text(PY_SOURCE)
    snippet, method = read_code_context(path, line=6, selection="if user is None:")
    assert snippet == "if user is None:"
    assert method == "authenticate"


def test_read_code_context_missing_file(tmp_path):
    assert read_code_context(tmp_path / "gone.py", line=1) == ("", "")
