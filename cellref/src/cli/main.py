import os
import copy
import json
import click
import yaml
import logging
from typing import Dict, Any
from ..utils.address import (
    column_number_to_name,
    column_name_to_number,
    row_and_column_to_address,
    address_to_full_address,
    address_to_row_and_column,
)
from ..utils.sheet_index import SheetIndex
from ..sheets.address_table import AddressTable
from ..utils.ui import ConsoleUIManager

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config/config.yaml'

DEFAULT_CONFIG: Dict[str, Any] = {
    'addresses': {
        'default_sheet': None,
        'header_rows': 1,
    },
    'output': {
        'format': 'plain',
        'show_stats': True,
    },
}

OUTPUT_FORMATS = ('plain', 'json')

def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML file, on top of the defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not os.path.exists(config_path):
        logger.debug(f"No config file at {config_path}, using defaults")
        return config

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise TypeError(f"Invalid config file {config_path}. Expected a mapping at top level")

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config

def validate_config(config):
    """Validate the configuration."""
    # Define expected types for config values
    validation_schema = {
        'addresses': {
            'default_sheet': (str, type(None)),  # Optional
            'header_rows': int,
        },
        'output': {
            'format': str,
            'show_stats': bool,
        },
    }

    def validate_dict(config_section, schema, path=""):
        for key, expected in schema.items():
            current_path = f"{path}.{key}" if path else key

            if key not in config_section:
                raise ValueError(f"Missing required config value: {current_path}")

            if isinstance(expected, dict):
                if not isinstance(config_section[key], dict):
                    raise TypeError(f"Invalid type for {current_path}. Expected dict")
                validate_dict(config_section[key], expected, current_path)
            elif not isinstance(config_section[key], expected) or \
                    (expected is int and isinstance(config_section[key], bool)):
                raise TypeError(
                    f"Invalid type for {current_path}. "
                    f"Expected {expected}, got {type(config_section[key])}"
                )

    validate_dict(config, validation_schema)

    if config['output']['format'] not in OUTPUT_FORMATS:
        raise ValueError(f"Invalid output.format: {config['output']['format']}. Expected one of {OUTPUT_FORMATS}")
    if config['addresses']['header_rows'] < 0:
        raise ValueError("addresses.header_rows must not be negative")

def setup_logging(verbose_level: int):
    """Set up logging with different verbosity levels.

    Level 0: WARNING (default)
    Level 1: INFO
    Level 2: DEBUG
    """
    level = logging.WARNING
    if verbose_level == 1:
        level = logging.INFO
    elif verbose_level >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format='[%(levelname)s @ %(filename)s:%(lineno)d] %(message)s'
    )

@click.group()
@click.option('--config', default=DEFAULT_CONFIG_PATH, help='Path to configuration file')
@click.option(
    '--verbose',
    '-v',
    count=True,
    help='Increase verbosity (use -v for info, -vv for debug)'
)
@click.pass_context
def cli(ctx, config, verbose):
    """cellref - Convert between spreadsheet cell addresses and row/column numbers."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    try:
        ctx.obj['config'] = load_config(config)
        validate_config(ctx.obj['config'])
    except (ValueError, TypeError, yaml.YAMLError) as e:
        logger.error(f"Invalid configuration: {str(e)}")
        raise click.ClickException(f"Invalid configuration in {config}: {str(e)}")
    ctx.obj['ui'] = ConsoleUIManager()

def _format_reference(ref: Dict[str, Any], output_format: str) -> str:
    if output_format == 'json':
        return json.dumps(ref)
    parts = [f"row={ref['row']}", f"column={ref['column']}"]
    if 'sheet' in ref:
        parts.append(f"sheet={ref['sheet']}")
    return ' '.join(parts)

@cli.command(name='column-name')
@click.argument('number')
def column_name_command(number):
    """Convert a column number to its name (27 -> AA)."""
    name = column_number_to_name(number)
    if name is None:
        raise click.BadParameter(f"{number!r} is not an integer >= 1", param_hint='NUMBER')
    click.echo(name)

@cli.command(name='column-number')
@click.argument('name')
def column_number_command(name):
    """Convert a column name to its number (AA -> 27)."""
    number = column_name_to_number(name)
    if number is None:
        raise click.BadParameter(f"{name!r} is not a column name", param_hint='NAME')
    click.echo(number)

@cli.command(name='to-address')
@click.argument('row')
@click.argument('column')
@click.option('--sheet', '-s', required=False, help='Sheet name (produces a full address)')
@click.pass_context
def to_address_command(ctx, row, column, sheet):
    """Convert a row and column number to an address."""
    if sheet is None:
        sheet = ctx.obj['config']['addresses']['default_sheet']
    address = row_and_column_to_address(row, column, sheet)
    if address is None:
        raise click.BadParameter(
            f"row {row!r} and column {column!r} must be integers >= 1", param_hint='ROW/COLUMN'
        )
    click.echo(address)

@cli.command(name='full-address')
@click.argument('sheet')
@click.argument('address')
def full_address_command(sheet, address):
    """Prefix an address with a quoted sheet name."""
    click.echo(address_to_full_address(sheet, address))

@cli.command(name='parse')
@click.argument('address')
@click.option('--json', 'as_json', is_flag=True, default=False, help='Print the result as JSON')
@click.pass_context
def parse_command(ctx, address, as_json):
    """Parse an address into row, column and sheet."""
    ref = address_to_row_and_column(address)
    if ref is None:
        raise click.BadParameter(f"{address!r} is not a cell address", param_hint='ADDRESS')
    output_format = 'json' if as_json else ctx.obj['config']['output']['format']
    click.echo(_format_reference(ref, output_format))

@cli.command(name='locate')
@click.argument('address')
@click.option('--header-rows', type=int, default=None, help='Header rows above the data (default: from config)')
@click.pass_context
def locate_command(ctx, address, header_rows):
    """Show the 0-based DataFrame position of an address."""
    if header_rows is None:
        header_rows = ctx.obj['config']['addresses']['header_rows']
    try:
        row_idx, col_idx = SheetIndex.to_df_position(address, header_rows)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='ADDRESS')
    click.echo(f"index={row_idx} column={col_idx}")

@cli.command(name='convert')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--address-column', '-a', help='Column of addresses to parse into row/column/sheet')
@click.option('--row-column', '-r', help='Column of row numbers to format into addresses')
@click.option('--col-column', '-c', help='Column of column numbers to format into addresses')
@click.option('--sheet-column', help='Column of sheet names used when formatting')
@click.option('--output', '-o', type=click.Path(dir_okay=False, writable=True), help='Output CSV (default: stdout)')
@click.option('--strict', is_flag=True, default=False, help='Fail on the first invalid value')
@click.pass_context
def convert_command(ctx, input_file, address_column, row_column, col_column, sheet_column, output, strict):
    """Convert a whole CSV table of addresses or coordinates."""
    ui = ctx.obj['ui']

    if address_column and (row_column or col_column):
        raise click.UsageError("Use either --address-column or --row-column/--col-column, not both")
    if not address_column and not (row_column and col_column):
        raise click.UsageError("Either --address-column or both --row-column and --col-column are required")

    try:
        table = AddressTable.from_csv(input_file)
        if address_column:
            result = table.parse_addresses(address_column, strict=strict)
        else:
            result = table.format_addresses(row_column, col_column, sheet_column, strict=strict)
    except (KeyError, ValueError, OverflowError) as e:
        logger.error(f"Conversion failed: {str(e)}")
        ui.error(f"Conversion failed: {str(e)}")
        raise click.ClickException(str(e).strip("'\""))

    if output:
        result.to_csv(output, index=False)
        ui.info(f"Wrote {len(result.index)} rows to {output}")
    else:
        click.echo(result.to_csv(index=False), nl=False)

    if ctx.obj['config']['output']['show_stats']:
        ui.print_overall_stats(table.stats)
    if table.stats['failed']:
        ui.warning(f"{table.stats['failed']} invalid value(s) left empty")

@cli.command()
@click.pass_context
def init(ctx):
    """Initialize configuration."""
    config_path = ctx.obj['config_path']
    config_dir = os.path.dirname(config_path)
    if config_dir:
        os.makedirs(config_dir, exist_ok=True)

    # Create default config if it doesn't exist
    if os.path.exists(config_path):
        click.echo(f"Configuration file already exists: {config_path}")
        return

    with open(config_path, 'w') as f:
        yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False)
    click.echo(f"Created default configuration file: {config_path}")

def main():
    """Entry point for the CLI."""
    cli(obj={})

if __name__ == '__main__':
    main()
