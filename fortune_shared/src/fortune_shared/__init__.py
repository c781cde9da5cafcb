from importlib import resources as _resources

__all__ = [
    "data_path",
    "read_asset",
]

def data_path(filename: str) -> str:
    """Return a filesystem path to a packaged asset (e.g., assets/animals.json).

    Use for compatibility where APIs want a file path; for direct reads prefer
    read_asset().
    """
    f = _resources.files("fortune_shared.assets").joinpath(filename)
    return str(f)


def read_asset(filename: str) -> str:
    return _resources.files("fortune_shared.assets").joinpath(filename).read_text(encoding="utf-8")
