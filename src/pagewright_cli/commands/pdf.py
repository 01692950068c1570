"""PDF merge and split commands on local files."""

from pathlib import Path
from typing import List, Annotated, Optional

import typer

from pagewright_cli.console.console import Console
from pagewright_core.exceptions import InputValidationException, ProcessingException
from pagewright_core.models import InvalidRangeExpression
from pagewright_core.services import DocumentAssembler, SourceDocument, parse_page_ranges

app = typer.Typer()

console = Console()


def validate_pdf_file(file_path: str) -> Path:
    """Return the path of an existing .pdf file, exit with an error otherwise."""
    path = Path(file_path)
    if not path.is_file():
        console.error(f'Input file not found: {file_path}', panel=True)
        raise typer.Exit(1)
    if path.suffix.lower() != '.pdf':
        console.error(f'Input file must be a PDF: {file_path}', panel=True)
        raise typer.Exit(1)
    return path


@app.command(name='merge', help='Merge multiple PDF files into a single PDF')
def merge(
    inputs: Annotated[
        List[str],
        typer.Argument(help='Two or more PDF files, merged in the given order.'),
    ],
    output: Annotated[
        str,
        typer.Option('--output', '-o', help='Output file path for the merged PDF.'),
    ] = 'merged.pdf',
):
    """
    Merge PDF files into one, all pages of each file in the order given.

    Examples:

        pagewright merge cover.pdf report.pdf appendix.pdf -o final.pdf
    """
    console.action('Merge PDF files')

    paths = [validate_pdf_file(item) for item in inputs]

    output_path = Path(output)
    if output_path.suffix.lower() != '.pdf':
        output_path = output_path.with_suffix('.pdf')

    try:
        sources = [SourceDocument(path) for path in paths]
        with DocumentAssembler().merge(sources) as merged:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(merged.to_bytes())
            page_count = merged.page_count
    except InputValidationException as e:
        console.warning(e.message, panel=True)
        raise typer.Exit(1)
    except ProcessingException as e:
        console.error(f'Error during merge: {e.details.get("file", "")} {e.message}'.strip())
        raise typer.Exit(1)

    console.success(f'Successfully merged {len(paths)} files ({page_count} pages) into {output_path}')


@app.command(name='split', help='Split a PDF file by page ranges')
def split(
    input_file: Annotated[str, typer.Argument(help='PDF file to split')],
    pages: Annotated[
        str,
        typer.Option('--pages', '-p', help='Comma separated pages and ranges, e.g. "1,3-4".'),
    ],
    output_dir: Annotated[
        Optional[str],
        typer.Option(
            '--output',
            '-o',
            help='Output directory for split files. If not specified, creates a folder next to the input file.',
        ),
    ] = None,
):
    """
    Split a PDF file, one output file per comma separated group.

    Output files are named: {stem}_{first}-{last}.pdf

    Examples:

        pagewright split report.pdf --pages "1,3-4" -o ./parts
    """
    console.action('Split PDF file')

    input_path = validate_pdf_file(input_file)
    output_path = Path(output_dir) if output_dir else input_path.parent / f'{input_path.stem}_split'

    try:
        with SourceDocument(input_path) as source:
            spec = parse_page_ranges(pages, source.page_count)
            if isinstance(spec, InvalidRangeExpression):
                console.error(f'Invalid page range: {spec.reason}', panel=True)
                raise typer.Exit(1)

            outputs = DocumentAssembler().split(source, spec)
    except ProcessingException as e:
        console.error(f'Error during split: {e.message}')
        raise typer.Exit(1)

    output_path.mkdir(parents=True, exist_ok=True)
    for group, output in zip(spec.groups, outputs):
        with output:
            output_file = output_path / f'{input_path.stem}_{group.label}.pdf'
            output_file.write_bytes(output.to_bytes())
        console.print(f'[faint]⎿ [/faint] Created {output_file.name} ({len(group)} page{"s" if len(group) > 1 else ""})')

    console.success(
        f'Successfully split PDF into {len(outputs)} file{"s" if len(outputs) > 1 else ""} in {output_path}'
    )
