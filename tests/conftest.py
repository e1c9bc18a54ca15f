import pathlib
import typing

import pytest

TEST_PACKAGE_FOLDER = pathlib.Path(__file__).parent
FIXTURE_FOLDER = TEST_PACKAGE_FOLDER / "fixtures"


@pytest.fixture
def fixtures_folder() -> pathlib.Path:
    return FIXTURE_FOLDER


@pytest.fixture
def write_bean_file(
    tmp_path: pathlib.Path,
) -> typing.Callable[[str], pathlib.Path]:
    def _write_bean_file(content: str, name: str = "main.bean") -> pathlib.Path:
        bean_file = tmp_path / name
        bean_file.write_text(content, encoding="utf-8")
        return bean_file

    return _write_bean_file
