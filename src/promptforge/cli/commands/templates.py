"""Template library CLI commands."""

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .common import console


def _library():
    from ...library import library_from_settings
    return library_from_settings()


@click.command("templates")
@click.option("-c", "--category", default=None, help="Only show this category")
@click.option("-s", "--search", "query", default=None, help="Filter by name, description, or tag")
def list_templates(category, query):
    """List available templates.

    Examples:

        forge templates

        forge templates --category Coding

        forge templates --search python
    """
    from ...variables import extract_variable_names

    library = _library()
    templates = library.search(query) if query else library.list_templates()
    if category:
        templates = [t for t in templates if t.category == category]

    table = Table(title="Available Templates")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Category")
    table.add_column("Description")
    table.add_column("Variables")

    for t in templates:
        table.add_row(
            escape(t.id),
            escape(t.name),
            escape(t.category),
            escape(t.description),
            escape(", ".join(extract_variable_names(t.content)))
        )

    console.print(table)


@click.command()
@click.argument("template_id")
def show(template_id):
    """Show a template and its variables.

    Example:

        forge show t7
    """
    from ...core.exceptions import TemplateNotFoundError
    from ...variables import extract_variable_names

    try:
        template = _library().get(template_id)
    except TemplateNotFoundError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise click.Abort()

    console.print(Panel(Text(template.content), title=f"{escape(template.name)} [dim]({escape(template.id)})[/dim]"))
    console.print(f"[bold]Category:[/bold] {escape(template.category)}")
    if template.description:
        console.print(f"[bold]Description:[/bold] {escape(template.description)}")
    if template.tags:
        console.print(f"[bold]Tags:[/bold] {escape(', '.join(template.tags))}")

    names = extract_variable_names(template.content)
    if names:
        console.print("\n[bold]Variables:[/bold]")
        for name in names:
            console.print(f"  - [blue]{{{{[/blue]{escape(name)}[blue]}}}}[/blue]")


@click.command()
@click.option("-f", "--file", "input_file", type=click.Path(exists=True), help="Read template text from file")
@click.option("-n", "--name", required=True, help="Template name")
@click.option("-d", "--description", default="", help="Template description")
@click.option("-c", "--category", default="Custom", help="Template category")
@click.option("--id", "template_id", default=None, help="Update this saved template instead of creating one")
def save(input_file, name, description, category, template_id):
    """Save template text as a user template.

    Examples:

        forge save -f review.txt --name "Code Review" --category Coding

        cat review.txt | forge save --name "Code Review" --id custom_1712345678901
    """
    from ...core.exceptions import TemplateError
    from .common import load_prompt_text

    library = _library()
    text, _ = load_prompt_text(None, input_file, library)

    try:
        template = library.save(text, name, description, category, template_id)
    except TemplateError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise click.Abort()

    console.print(f"[green]Saved:[/green] {template.name} ({template.id})")


@click.command()
@click.argument("template_id")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation")
def delete(template_id, yes):
    """Delete a saved template.

    Example:

        forge delete custom_1712345678901
    """
    from ...core.exceptions import TemplateError

    if not yes:
        click.confirm("Are you sure you want to delete this template?", abort=True)

    try:
        template = _library().delete(template_id)
    except TemplateError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise click.Abort()

    console.print(f"[green]Deleted:[/green] {template.name} ({template.id})")
