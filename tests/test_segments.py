"""Path segmentation tests."""

import pytest

from routeforge.engine.segments import join_path, split_path


@pytest.mark.parametrize(
    "path,separator,expected",
    [
        ("users/42/orders", "/", ["users", "42", "orders"]),
        ("/users//42/", "/", ["", "users", "", "42", ""]),
        ("", "/", [""]),
        ("api.v1", ".", ["api", "v1"]),
        ("a::b", "::", ["a", "b"]),
    ],
)
def test_split_path(path: str, separator: str, expected: list[str]) -> None:
    assert split_path(path, separator) == expected
    assert join_path(expected, separator) == path


def test_split_path_rejects_non_strings() -> None:
    with pytest.raises(TypeError):
        split_path(b"users/42")  # type: ignore[arg-type]
