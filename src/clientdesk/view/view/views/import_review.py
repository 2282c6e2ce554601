# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from clientdesk.model.import_row import IMPORT_FIELDS, BulkImportResult, ImportRow
from clientdesk.service.csv_import import CSV_COLUMN_LABELS
from clientdesk.view.view.views.header import header


def import_review_view(
    rows: list[ImportRow], warnings: list[str], errors_only: bool = False
) -> None:
    header("import review")

    console = Console()
    for warning in warnings:
        console.print(f" [dark_orange]{warning}[/dark_orange]")

    valid_count = sum(1 for row in rows if row["is_valid"])
    invalid_count = len(rows) - valid_count
    console.print(
        f" {len(rows)} row(s): [green]{valid_count} valid[/green],"
        f" [red]{invalid_count} with errors[/red]"
    )

    review_table = Table(box=box.SIMPLE)
    review_table.add_column("row")
    for field in IMPORT_FIELDS:
        review_table.add_column(CSV_COLUMN_LABELS[field])
    review_table.add_column("status")

    for row in rows:
        if errors_only and row["is_valid"]:
            continue
        values = []
        for field in IMPORT_FIELDS:
            value = row["data"][field]
            if field in row["errors"]:
                value = f"[red]{value or '-'}[/red]"
            values.append(value)
        status = "[green]ok[/green]" if row["is_valid"] else "[red]invalid[/red]"
        review_table.add_row(str(row["row_index"] + 1), *values, status)

    console.print(review_table)

    for row in rows:
        for field, message in row["errors"].items():
            console.print(
                f" [red]row {row['row_index'] + 1} {CSV_COLUMN_LABELS[field]}:[/red] {message}"
            )


def import_result_view(result: BulkImportResult) -> None:
    header("import")

    console = Console()
    console.print(
        f" [green]{result['imported']} imported[/green], [red]{result['failed']} failed[/red]"
    )
    for error in result["errors"]:
        console.print(f" [red]row {error['row']}:[/red] {error['error']}")
