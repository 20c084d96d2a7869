"""
Command-line interface for UniProt FASTA header parsing.

This module provides CLI commands for parsing the headers of a FASTA file,
parsing a single header, and showing the effective configuration.
"""

import json
import sys

import click

from .config import SystemConfig, load_config_from_file, HEADER_FORMAT_CHOICES
from .errors import UniProtHeaderError, HeaderParseError
from .logging_config import setup_logging
from .parser import AUTO_FORMAT, detect_header_format, get_parser
from .reader import HeaderReader


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True),
              help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True,
              help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """UniProt FASTA header parser."""
    ctx.ensure_object(dict)

    try:
        if config:
            system_config = load_config_from_file(config)
        else:
            system_config = SystemConfig.from_env()
        system_config.validate()
    except UniProtHeaderError as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(2)

    if verbose:
        system_config.logging.level = "DEBUG"

    setup_logging(system_config.logging)

    ctx.obj['config'] = system_config


@cli.command()
@click.argument('fasta_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', 'header_format', type=click.Choice(HEADER_FORMAT_CHOICES),
              help='Header format, "auto" picks per header from its identifier')
@click.option('--output', 'output_format', type=click.Choice(['json', 'table', 'summary']),
              default='json', help='Output format')
@click.option('--strict', is_flag=True,
              help='Require UniProt accession and entry name formats')
@click.option('--fail-fast', is_flag=True,
              help='Stop at the first header that cannot be parsed')
@click.pass_context
def parse(ctx, fasta_file, header_format, output_format, strict, fail_fast):
    """Parse every header line of FASTA_FILE."""
    config = ctx.obj['config']

    if header_format:
        config.reader.header_format = header_format
    if strict:
        config.parser.strict_identifiers = True
    if fail_fast:
        config.reader.on_error = "fail"

    try:
        report = HeaderReader(config).read(fasta_file)
    except HeaderParseError as e:
        click.echo(f"Parse failed: {e}", err=True)
        if e.header is not None:
            click.echo(f"  {e.header}", err=True)
        sys.exit(1)
    except UniProtHeaderError as e:
        click.echo(f"Parse failed: {e}", err=True)
        sys.exit(1)

    if output_format == 'json':
        for record in report.records:
            click.echo(json.dumps({"format": record.format, **record.to_json_dict()}))

    elif output_format == 'table':
        for record in report.records:
            identifier = record.identifier
            if record.format == "uniprotkb_isoform":
                identifier = record.isoform_identifier
            click.echo(
                f"{record.database.tag}\t{identifier}\t{record.entry_name}\t"
                f"{record.organism_identifier}\t{record.gene_name or '-'}\t{record.protein_name}"
            )

    else:  # summary format
        summary = report.to_summary_dict()
        click.echo("=== Header Parsing Summary ===")
        click.echo(f"Source: {summary['source']}")
        click.echo(f"Headers: {summary['total_headers']}")
        for name, count in summary['records_by_format'].items():
            click.echo(f"  {name}: {count}")
        click.echo(f"Errors: {summary['errors']}")
        click.echo(f"Success rate: {summary['success_rate']:.1f}%")
        click.echo(f"Duration: {summary['duration_seconds']:.3f} seconds")

    for failure in report.errors:
        click.echo(
            f"line {failure.line_number}: {failure.error_type}: {failure.message}",
            err=True
        )


@cli.command()
@click.argument('header_text')
@click.option('--format', 'header_format', type=click.Choice(HEADER_FORMAT_CHOICES),
              help='Header format, defaults to the configured format')
@click.option('--strict', is_flag=True, help='Require UniProt accession and entry name formats')
@click.pass_context
def header(ctx, header_text, header_format, strict):
    """Parse a single HEADER_TEXT and print it as JSON."""
    config = ctx.obj['config']

    header_format = header_format or config.reader.header_format
    if header_format == AUTO_FORMAT:
        header_format = detect_header_format(header_text)

    parser = get_parser(
        header_format,
        strict=strict or config.parser.strict_identifiers,
        encoding=config.parser.encoding
    )

    try:
        record, remainder = parser.parse(header_text)
    except HeaderParseError as e:
        click.echo(f"Parse failed: {e}", err=True)
        sys.exit(1)

    output = {"format": record.format, **record.to_json_dict()}
    if remainder.strip():
        output["unparsed"] = remainder
    click.echo(json.dumps(output, indent=2))


@cli.command('config-show')
@click.pass_context
def config_show(ctx):
    """Show the effective configuration."""
    click.echo(json.dumps(ctx.obj['config'].to_dict(), indent=2))


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.", err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
