"""Command line interface for streamvariant."""
import json
import sys
from typing import Any, Dict

import click
from loguru import logger

from .decoding import parse_json
from .errors import DecodeError
from .utils.logging import setup_logging
from .variant import StreamOutputVariant

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def describe_variant(variant: StreamOutputVariant, effective: bool = True) -> Dict[str, Any]:
    """Encode a variant, optionally with its effective values attached."""
    data = variant.encode()
    if effective:
        data["effective"] = {
            "framerate": variant.effective_framerate(),
            "encoderPreset": variant.effective_preset(),
            "cpuUsageLevel": variant.effective_cpu_usage_level(),
            "audioPassthrough": variant.is_effectively_audio_passthrough(),
        }
    return data


@click.command()
@click.argument('source', type=click.File('rb'), default='-')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default='WARNING', show_default=True, help='Minimum log level.')
@click.option('--log-file', type=click.Path(dir_okay=False), default=None,
              help='Also write logs to this file.')
@click.option('--effective/--no-effective', default=True, show_default=True,
              help='Include effective values in the output.')
@click.option('--indent', type=int, default=2, show_default=True,
              help='JSON indentation.')
def main(source, log_level: str, log_file: str, effective: bool, indent: int) -> None:
    """Resolve stream output variant settings.

    SOURCE is a JSON file holding one variant object or a list of them.
    Reads stdin when SOURCE is omitted or '-'.
    """
    setup_logging(log_level.upper(), log_file)

    try:
        document = parse_json(source.read())
        raw_variants = document if isinstance(document, list) else [document]
        resolved = []
        for index, raw in enumerate(raw_variants):
            try:
                resolved.append(describe_variant(StreamOutputVariant.decode(raw), effective))
            except DecodeError as e:
                if isinstance(document, list):
                    e.message = f"Variant {index}: {e.message}"
                raise
    except DecodeError as e:
        logger.debug(f"Decode failed: {e.details}")
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    logger.info(f"Resolved {len(resolved)} variant(s)")
    output = resolved if isinstance(document, list) else resolved[0]
    click.echo(json.dumps(output, indent=indent))


if __name__ == '__main__':
    main()
