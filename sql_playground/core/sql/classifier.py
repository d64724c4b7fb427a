import re
from dataclasses import dataclass
from typing import Optional

from sql_playground.core.errors import EmptyStatementError


# -----------------------------------------------------------------------------
# STATEMENT CLASSIFIER
# Purpose: decide read vs mutation and guess which table a statement touches.
# This is a lexical best-effort extractor, not a parser: the leftmost
# FROM/INTO/TABLE wins, joins and subqueries are not understood.
# -----------------------------------------------------------------------------

TABLE_PATTERN = re.compile(r"\b(FROM|INTO|TABLE)\s+['\"]?(\w+)['\"]?", re.IGNORECASE)
CREATE_TABLE_PATTERN = re.compile(r"\bCREATE\s+(?:TEMP(?:ORARY)?\s+)?TABLE\b")


@dataclass(frozen=True)
class Statement:
    text: str
    is_read: bool
    table_name: Optional[str]

    @property
    def upper(self) -> str:
        return self.text.upper()

    @property
    def verb(self) -> str:
        return self.upper.split()[0]

    @property
    def is_table_creation(self) -> bool:
        return CREATE_TABLE_PATTERN.search(self.upper) is not None


def extract_table_name(sql: str) -> Optional[str]:
    """
    Return the word following the first FROM, INTO or TABLE keyword.

    Examples:
        "select * from Foo"          -> "Foo"
        "INSERT INTO 'bar' VALUES 1" -> "bar"
        "PRAGMA table_info(x)"       -> None
    """
    match = TABLE_PATTERN.search(sql)
    return match.group(2) if match else None


def classify(sql: Optional[str]) -> Statement:
    cleaned = (sql or "").strip()
    if not cleaned:
        raise EmptyStatementError()

    return Statement(
        text=cleaned,
        is_read=cleaned.upper().startswith("SELECT"),
        table_name=extract_table_name(cleaned),
    )
