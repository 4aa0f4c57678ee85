from dataclasses import dataclass


@dataclass
class TableModel:
    title: str
    columns: list[str]
    rows: list[list[str]]
    status_column: int | None = None  # cells coloured by status value
