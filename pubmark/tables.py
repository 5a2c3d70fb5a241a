from typing import List


def parse_table_cells(line: str) -> List[str]:
    """Split a `| a | b |` row into trimmed cell strings."""
    line = line.strip().strip("|")
    return [cell.strip() for cell in line.split("|")]


def is_table_separator(line: str) -> bool:
    """True for header/body separator rows such as `|---|:---:|`."""
    for cell in parse_table_cells(line):
        if cell.replace("-", "").replace(":", ""):
            return False
    return True
