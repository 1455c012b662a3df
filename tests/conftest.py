import pytest
import pathlib


@pytest.fixture(scope="session")
def test_assets_dir() -> pathlib.Path:
    """Provides a pathlib.Path to the shared test_assets directory."""
    test_assets_path = pathlib.Path(__file__).parent.parent / "test_assets"
    if not test_assets_path.is_dir():
        raise FileNotFoundError(
            f"test_assets directory not found at: {test_assets_path}"
        )
    return test_assets_path.resolve()


@pytest.fixture(scope="session")
def mz_assets_dir(test_assets_dir: pathlib.Path) -> pathlib.Path:
    """Directory holding hello.exe and its captured region dumps."""
    path = test_assets_dir / "mz"
    if not path.is_dir():
        raise FileNotFoundError(f"Required test assets directory not found: {path}")
    return path


@pytest.fixture(scope="session")
def hello_exe_path(mz_assets_dir: pathlib.Path) -> pathlib.Path:
    """
    Path to a small DOS "Hello, world!" program.

    Layout (81 bytes):
        [0x00, 0x20)  header, 2 paragraphs, one relocation entry at 0x1c
        [0x20, 0x41)  image: code + "Hello, world!\\r\\n$"
        [0x41, 0x51)  extra data: b"TRAILING-OVERLAY"
    """
    path = mz_assets_dir / "hello.exe"
    if not path.exists():
        raise FileNotFoundError(f"Required test asset not found: {path}")
    return path


@pytest.fixture(scope="session")
def hello_exe(hello_exe_path: pathlib.Path) -> bytes:
    """Contents of hello.exe."""
    return hello_exe_path.read_bytes()


@pytest.fixture(scope="session")
def expected_dump(mz_assets_dir: pathlib.Path):
    """Returns a loader for captured hex dumps by region name."""

    def load(name: str) -> str:
        return (mz_assets_dir / f"{name}_expected.txt").read_text()

    return load
