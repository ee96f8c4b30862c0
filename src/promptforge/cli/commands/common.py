"""Helpers shared by CLI commands."""

from typing import Dict, Optional, Tuple

import click
from rich.console import Console

console = Console()


def parse_assignments(assignments: Tuple[str, ...]) -> Dict[str, str]:
    """Parse repeated ``name=value`` options into a dict."""
    values: Dict[str, str] = {}
    for item in assignments:
        if "=" not in item:
            raise click.BadParameter(f"Expected name=value, got '{item}'", param_hint="--var")
        name, value = item.split("=", 1)
        values[name.strip()] = value
    return values


def load_prompt_text(template_id: Optional[str], input_file: Optional[str], library) -> Tuple[str, Optional[str]]:
    """
    Resolve prompt text from a template id, a file, or stdin.

    Returns:
        (text, template_id) where template_id is None for file/stdin input
    """
    if template_id:
        return library.get(template_id).content, template_id

    if input_file:
        with open(input_file, encoding="utf-8") as f:
            text = f.read()
    else:
        text = click.get_text_stream("stdin").read()

    if not text or not text.strip():
        console.print("[red]Error:[/red] No prompt provided")
        raise click.Abort()
    return text, None


def write_output(text: str, output_file: Optional[str]) -> None:
    """Write ``text`` to a file, or echo it."""
    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(text)
        console.print(f"[green]Saved to:[/green] {output_file}")
    else:
        click.echo(text)
