import sys
from dataclasses import dataclass
from typing import Callable, List, Optional
from urllib.parse import urlparse

import click

from .. import __version__
from .._lifecycle import ENDOFLIFE_API_BASE, LifecycleClient, OutputRow, read_requests_from_file, serialize_row
from ..console import print_error, print_lookup_summary, print_row_error
from ..exceptions import ConfigurationError, FileProcessingError, TemplateError
from ..logging_config import logger, set_log_level
from ..lookup import BatchResult, RowFailure, process_requests
from ..report import DEFAULT_OUTPUT, default_template_path, load_template, write_report

"""

The lookup reads `product,version` rows from a CSV file and writes one
`"label","version","category","eol_date"` row per input row to stdout.

# Exit codes
- 0: every row was looked up
- 1: at least one row failed (each failure is reported on stderr), or the
  report template is unusable
- 2: usage error (bad option, unreadable input file)

# Configuration
Options fall back to environment variables:
- EOL_RATE_LIMIT: Delay in seconds before each product lookup (default: 1)
- EOL_API_BASE_URL: Override the API base URL (default: https://endoflife.date/api)
- LOG_LEVEL: Logging level for diagnostics on stderr (default: WARNING)

"""

DEFAULT_INPUT_FILE = "products.csv"
DEFAULT_RATE_LIMIT = 1
LOCALHOST_PATTERNS = ["127.0.0.1", "localhost", "0.0.0.0"]

USAGE_ERROR_EXIT_CODE = 2

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@dataclass
class Config:
    """Configuration settings for a lookup run."""

    input_file: str = DEFAULT_INPUT_FILE
    rate_limit: int = DEFAULT_RATE_LIMIT
    api_base_url: str = ENDOFLIFE_API_BASE
    summary: bool = False

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.input_file:
            raise ConfigurationError("Input CSV path is empty")
        if self.rate_limit < 0:
            raise ConfigurationError("Rate limit must be a non-negative number of seconds")

        self._validate_api_url()

    def _validate_api_url(self) -> None:
        """
        Validate and normalize the API base URL.

        Raises:
            ConfigurationError: If URL format is invalid
        """
        try:
            parsed = urlparse(self.api_base_url)
        except ValueError as e:
            raise ConfigurationError(f"Invalid API base URL format: {e}")

        if not parsed.scheme or parsed.scheme not in ("http", "https"):
            raise ConfigurationError("API base URL must start with http:// or https://")

        if not parsed.netloc:
            raise ConfigurationError("API base URL must include a valid hostname")

        if parsed.scheme == "http" and not any(localhost in parsed.netloc for localhost in LOCALHOST_PATTERNS):
            logger.warning("Using HTTP (not HTTPS) for API communication - consider using HTTPS")

        # Remove trailing slash if present for consistency
        if self.api_base_url.endswith("/"):
            self.api_base_url = self.api_base_url.rstrip("/")


def build_config(
    input_file: Optional[str] = None,
    rate_limit: Optional[int] = None,
    api_url: Optional[str] = None,
    summary: bool = False,
) -> Config:
    """
    Build and validate a Config from CLI values.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = Config(
        input_file=input_file or DEFAULT_INPUT_FILE,
        rate_limit=DEFAULT_RATE_LIMIT if rate_limit is None else rate_limit,
        api_base_url=api_url or ENDOFLIFE_API_BASE,
        summary=summary,
    )
    config.validate()
    return config


def emit_row(row: OutputRow) -> None:
    """Write one row to stdout immediately."""
    click.echo(serialize_row(row))


def report_failure(failure: RowFailure) -> None:
    print_row_error(failure.product, failure.version, failure.reason)


def run_lookup(config: Config, emit: Callable[[OutputRow], None] = emit_row) -> BatchResult:
    """
    Run the lookup for every row of the configured input file.

    Raises:
        FileProcessingError: If the input file cannot be read
    """
    pending = read_requests_from_file(config.input_file)
    logger.debug(f"Read {len(pending)} request(s) from {config.input_file}")

    with LifecycleClient(base_url=config.api_base_url) as client:
        result = process_requests(
            pending,
            client,
            emit=emit,
            report_failure=report_failure,
            rate_limit=config.rate_limit,
        )

    if config.summary:
        print_lookup_summary(
            processed=result.processed,
            emitted=result.emitted,
            not_found=result.not_found,
            failed=len(result.failures),
        )
    return result


def _load_config_or_exit(input_file, rate_limit, api_url, summary) -> Config:
    try:
        return build_config(input_file=input_file, rate_limit=rate_limit, api_url=api_url, summary=summary)
    except ConfigurationError as e:
        print_error(f"Configuration error: {e}")
        sys.exit(USAGE_ERROR_EXIT_CODE)


def _common_options(func):
    func = click.option(
        "-v",
        "--verbose",
        is_flag=True,
        help="Log debug diagnostics to stderr.",
    )(func)
    func = click.option(
        "--api-url",
        envvar="EOL_API_BASE_URL",
        default=ENDOFLIFE_API_BASE,
        show_default=True,
        help="Base URL of the endoflife.date API.",
    )(func)
    func = click.option(
        "-r",
        "--rate-limit",
        type=click.IntRange(min=0),
        envvar="EOL_RATE_LIMIT",
        default=DEFAULT_RATE_LIMIT,
        show_default=True,
        metavar="SECONDS",
        help="Delay before each product lookup.",
    )(func)
    func = click.argument("input_file", required=False, metavar="[FILE]")(func)
    return func


@click.command(context_settings=CONTEXT_SETTINGS)
@_common_options
@click.option("--summary", is_flag=True, help="Print a summary table on stderr when done.")
@click.version_option(__version__, "--version", prog_name="eolcheck")
def cli(
    input_file: Optional[str],
    rate_limit: int,
    api_url: str,
    verbose: bool,
    summary: bool,
) -> None:
    """Check end-of-life dates for products using the endoflife.date API.

    Reads FILE (default: products.csv) with "product,version" rows, an
    optional "product,version" header, and prints
    "label","version","category","eol_date" for each row.
    """
    if verbose:
        set_log_level("DEBUG")

    config = _load_config_or_exit(input_file, rate_limit, api_url, summary)

    try:
        result = run_lookup(config)
    except FileProcessingError as e:
        print_error(str(e))
        sys.exit(USAGE_ERROR_EXIT_CODE)

    sys.exit(result.exit_code)


@click.command(context_settings=CONTEXT_SETTINGS)
@_common_options
@click.option(
    "-t",
    "--template",
    "template_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="HTML template containing the <!--TABLE_ROWS--> marker (default: bundled template).",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    default=DEFAULT_OUTPUT,
    show_default=True,
    help="Where to write the HTML report.",
)
@click.option(
    "--csv",
    "csv_source",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="Render an existing lookup CSV ('-' for stdin) instead of querying the API.",
)
@click.version_option(__version__, "--version", prog_name="eolcheck-report")
def report_cli(
    input_file: Optional[str],
    rate_limit: int,
    api_url: str,
    verbose: bool,
    template_path: Optional[str],
    output_path: str,
    csv_source,
) -> None:
    """Render end-of-life lookup results into a static HTML report.

    Without --csv the lookup runs over FILE (default: products.csv) exactly as
    the eolcheck command does; failed rows are reported on stderr and left out
    of the report.
    """
    if verbose:
        set_log_level("DEBUG")

    try:
        template = load_template(template_path or default_template_path())
    except TemplateError as e:
        print_error(str(e))
        sys.exit(1)

    lines: List[str] = []
    result: Optional[BatchResult] = None
    if csv_source is not None:
        lines = csv_source.read().splitlines()
    else:
        config = _load_config_or_exit(input_file, rate_limit, api_url, summary=False)
        try:
            result = run_lookup(config, emit=lambda row: lines.append(serialize_row(row)))
        except FileProcessingError as e:
            print_error(str(e))
            sys.exit(USAGE_ERROR_EXIT_CODE)

    try:
        written = write_report(template, lines, output_path)
    except FileProcessingError as e:
        print_error(str(e))
        sys.exit(1)

    click.echo(f"Wrote {written}", err=True)
    sys.exit(result.exit_code if result is not None else 0)


def main() -> None:
    """Entry point for the eolcheck console script."""
    cli()


def report_main() -> None:
    """Entry point for the eolcheck-report console script."""
    report_cli()
