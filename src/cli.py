import click
import yaml
import sys
from pathlib import Path
from typing import Optional

from .exceptions import PDFWriterError
from .language import Language
from .utils import load_config, setup_logging, format_file_size, clean_filename
from generators.pdf import PDFDocumentGenerator, load_document


@click.command()
@click.argument('document', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o',
              type=click.Path(dir_okay=False),
              help='Output PDF filename (defaults to the document name)')
@click.option('--stdout',
              is_flag=True,
              help='Write the PDF to standard output instead of a file')
@click.option('--config', '-c',
              type=click.Path(exists=True),
              help='Configuration file path')
@click.option('--language', '-l',
              type=click.Path(exists=True, dir_okay=False),
              help='YAML file with language items')
@click.option('--verbose', '-v',
              is_flag=True,
              help='Enable verbose logging')
def render(document: str,
           output: Optional[str],
           stdout: bool,
           config: Optional[str],
           language: Optional[str],
           verbose: bool):
    """
    Render a YAML document description to PDF.

    DOCUMENT: Path of the document description
    """
    # Load configuration
    app_config = load_config(config or 'config.yaml')
    if verbose:
        app_config['logging']['level'] = 'DEBUG'
    if language:
        app_config['language']['file'] = language

    logger = setup_logging(app_config['logging'])

    try:
        document_data = load_document(document)
        generator = PDFDocumentGenerator(app_config, language=Language.from_config(app_config))
        writer = generator.build(document_data)

        if stdout:
            sys.stdout.buffer.write(writer.get_source_code())
            sys.stdout.buffer.flush()
            return

        if not output:
            title = document_data.get('title') or Path(document).stem
            output = clean_filename(str(title))
        output_path = writer.save_on_disk(writer.get_download_name(output))
        click.echo(f"PDF generated: {output_path} ({format_file_size(output_path.stat().st_size)})")

    except (PDFWriterError, OSError, ValueError, yaml.YAMLError) as e:
        logger.debug("Rendering failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def main():
    render()


if __name__ == '__main__':
    main()
