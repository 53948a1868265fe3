# aibridge/prompt/resources.py
from __future__ import annotations
import os
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Union

PACKAGE_PREFIX = "package:"


def load_text(location: Union[str, os.PathLike], encoding: str = "utf-8") -> str:
    """
    Read template text from a location:
      - "package:<dotted.package>/<path>" reads a resource shipped inside a package,
      - anything else is a filesystem path ("~" is expanded).
    Line endings are kept as stored.
    Raises FileNotFoundError when the resource does not exist.
    """
    loc = os.fspath(location)
    if loc.startswith(PACKAGE_PREFIX):
        ref = loc[len(PACKAGE_PREFIX):].lstrip("/")
        package, _, rel = ref.partition("/")
        if not package or not rel:
            raise ValueError(f"Package resource must look like 'package:<pkg>/<path>', got {loc!r}")
        try:
            resource = importlib_resources.files(package).joinpath(rel)
        except ModuleNotFoundError as e:
            raise FileNotFoundError(f"Resource package not found: {package}") from e
        if not resource.is_file():
            raise FileNotFoundError(f"Resource not found: {loc}")
        return resource.read_bytes().decode(encoding)
    return Path(loc).expanduser().read_bytes().decode(encoding)
