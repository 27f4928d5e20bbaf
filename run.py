#!/usr/bin/env python3
"""
feature2docx - Gherkin feature file to Word document converter
Main entry point for the upload web service and local conversion
"""

import click
import sys
from pathlib import Path
from dotenv import load_dotenv
from feature2docx import __version__
from feature2docx.core.config_manager import ConfigManager
from feature2docx.core.exceptions import Feature2DocxError
from feature2docx.parser.feature_parser import FeatureParser, feature_title
from feature2docx.reports.docx_renderer import DocxRenderer
from feature2docx.utils.logger import setup_logger, set_level

# Initialize logger
logger = setup_logger(__name__)


def load_settings(config: str, env: str) -> ConfigManager:
    """Load .env and the YAML configuration"""
    load_dotenv()
    config_manager = ConfigManager(config, env)
    config_manager.load_config()
    set_level(str(config_manager.get('logging.level', 'INFO')))
    return config_manager


@click.group()
@click.version_option(__version__, prog_name='feature2docx')
def main():
    """
    feature2docx - Turn BDD .feature files into shareable Word tables

    Examples:
        # Start the upload page on the configured port
        python run.py serve --env dev

        # Convert one file locally, keeping only smoke scenarios
        python run.py convert features/login.feature --tags @smoke
    """


@main.command()
@click.option('--env', '-e', default='dev', help='Environment config to load (dev/prod)')
@click.option('--config', '-c', default='config/config.yaml', help='Path to config file')
@click.option('--host', default=None, help='Interface to bind (overrides config)')
@click.option('--port', '-p', default=None, type=int, help='Port to listen on (overrides config)')
def serve(env, config, host, port):
    """Run the upload/download web service"""
    # Imported here so the convert command does not need Flask loaded
    from feature2docx.web.app import create_app

    try:
        config_manager = load_settings(config, env)
        host = host or config_manager.get('server.host', '127.0.0.1')
        port = port or int(config_manager.get('server.port', 3000))
        debug = bool(config_manager.get('server.debug', False))

        app = create_app(config_manager.config)
        logger.info(f"Starting feature2docx v{__version__} at http://{host}:{port}")
        app.run(host=host, port=port, debug=debug)

    except Feature2DocxError as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)


@main.command()
@click.argument('feature_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', default=None, help='Output .docx path (default: next to the input)')
@click.option('--tags', '-t', multiple=True, help='Only include scenarios with any of these tags')
def convert(feature_file, output, tags):
    """Convert a single .feature file to .docx"""
    try:
        parser = FeatureParser()
        records = parser.filter_by_tags(parser.parse_file(feature_file), tags)

        title = feature_title(feature_file)
        content = DocxRenderer().render(records, title)

        output_path = Path(output) if output else Path(feature_file).with_name(f"{title}.docx")
        output_path.write_bytes(content)

        logger.info(f"Wrote {len(records)} scenarios to {output_path}")

    except (Feature2DocxError, OSError, UnicodeDecodeError) as e:
        logger.error(f"Conversion failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
