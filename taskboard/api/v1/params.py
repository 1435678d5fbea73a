from typing import Annotated
from fastapi import Path

# Largest value a SQLite INTEGER primary key can hold
MAX_ROW_ID = 2 ** 63 - 1

RowId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]
