from __future__ import annotations

import typer

from region_index.cli.commands import code_command, name_command, shell_command, stats_command

app = typer.Typer(
    name="region-index",
    help="Administrative region index: code lookup, name search and hierarchy",
    add_completion=False,
)

app.command("code")(code_command)
app.command("name")(name_command)
app.command("stats")(stats_command)
app.command("shell")(shell_command)


def main():
    app()


if __name__ == "__main__":
    main()
