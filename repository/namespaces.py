# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "langextract"

DOCUMENTS: Final[str] = f"{ROOT}:documents"
