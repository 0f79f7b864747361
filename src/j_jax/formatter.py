"""Display text for array values, in the layout of the J session printer."""

from __future__ import annotations

from .values import JArray


def _format_table(rows: list[tuple[int, ...]]) -> list[str]:
    cells = [[str(x) for x in row] for row in rows]
    if not cells or not cells[0]:
        return ["" for _ in cells]
    widths = [max(len(row[col]) for row in cells) for col in range(len(cells[0]))]
    return [" ".join(cell.rjust(width) for cell, width in zip(row, widths, strict=True)) for row in cells]


def format_array(value: JArray) -> str:
    """Format a scalar, a vector, a table, or a stack of tables.

    Columns of a table are right-aligned to their widest entry. Arrays of
    rank three and above print each trailing table in row-major order,
    separated by a blank line.
    """
    if value.is_scalar:
        return str(value.item())

    if value.rank == 1:
        return " ".join(str(x) for x in value.data)

    n_rows, n_cols = value.shape[-2], value.shape[-1]
    table_size = n_rows * n_cols
    n_tables = value.size // table_size if table_size else 0

    blocks: list[str] = []
    for t in range(n_tables):
        table = value.data[t * table_size : (t + 1) * table_size]
        rows = [table[r * n_cols : (r + 1) * n_cols] for r in range(n_rows)]
        blocks.append("\n".join(_format_table(rows)))
    return "\n\n".join(blocks)
