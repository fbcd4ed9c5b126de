import json
import logging
import os

import click
from dotenv import load_dotenv

__version__ = "0.3.0"

from .exceptions import MarkpressError, SlugValidationError
from .logging_config import log_operation, setup_logger
from .rendering import Renderer
from .slugs import verify_slugs
from .utils import is_env_truthy, log_config_param
from .wordpress import (
    SyncOptions,
    WordPressConfig,
    WordPressHttpSyncer,
    WordPressSyncer,
)
from .wordpress.constants import (
    DEFAULT_REST_POST_TYPE,
    DEFAULT_XMLRPC_POST_TYPE,
    ENV_MARKPRESS_DRY_RUN,
    ENV_WORDPRESS_PASSWORD,
    ENV_WORDPRESS_POST_TYPE,
    ENV_WORDPRESS_SSL_VERIFY,
    ENV_WORDPRESS_URL,
    ENV_WORDPRESS_USERNAME,
)

LOGGER_NAME = "markpress"


def _parse_custom_fields(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    fields = {}
    for value in values:
        key, sep, field_value = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {value!r}")
        fields[key] = field_value
    return fields


def _report_slug_violations(error: SlugValidationError) -> None:
    for path, slug, violations in error.violations:
        click.secho("WARNING!!", fg="red", err=True)
        click.echo(
            f"The document {click.style(path, fg='blue')} has the slug "
            f"{click.style(repr(slug), fg='blue')} which is invalid because:",
            err=True,
        )
        for violation in violations:
            click.echo(f"  - {click.style(violation, fg='yellow')}", err=True)


@click.group()
@click.version_option(__version__, prog_name="markpress")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--log-dir",
    help="Directory to store log files",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    default=False,
    help="Enable/disable file logging",
)
@click.option("--wordpress-url", help="WordPress site URL (e.g., https://blog.example.com)")
@click.option("--wordpress-username", help="WordPress username")
@click.option("--wordpress-password", help="WordPress application password")
@click.option(
    "--wordpress-ssl-verify/--no-wordpress-ssl-verify",
    default=None,
    help="Verify SSL certificates (default: verify)",
)
def main(
    verbose: int,
    env_file: str | None,
    log_dir: str | None,
    log_to_file: bool,
    wordpress_url: str | None,
    wordpress_username: str | None,
    wordpress_password: str | None,
    wordpress_ssl_verify: bool | None,
) -> None:
    """markpress - render Markdown documents and sync them to WordPress."""
    logging_level = "WARNING"
    if verbose == 1:
        logging_level = "INFO"
    elif verbose >= 2:
        logging_level = "DEBUG"

    # Creates the package logger as a ContextualLogger
    logger = setup_logger(
        name=LOGGER_NAME,
        level=logging_level,
        log_to_file=log_to_file,
        log_dir=log_dir,
    )

    if env_file:
        logger.info(f"Loading environment from file: {env_file}")
        load_dotenv(env_file)
    else:
        logger.debug("Attempting to load environment from default .env file")
        load_dotenv()

    # Command line arguments override the environment
    if wordpress_url:
        os.environ[ENV_WORDPRESS_URL] = wordpress_url
    if wordpress_username:
        os.environ[ENV_WORDPRESS_USERNAME] = wordpress_username
    if wordpress_password:
        os.environ[ENV_WORDPRESS_PASSWORD] = wordpress_password
    if wordpress_ssl_verify is not None:
        os.environ[ENV_WORDPRESS_SSL_VERIFY] = str(wordpress_ssl_verify).lower()


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def render(path: str) -> None:
    """Render a document and print its HTML."""
    logger = logging.getLogger(LOGGER_NAME)
    try:
        rendering = Renderer().render(path)
    except MarkpressError as e:
        raise click.ClickException(str(e)) from e

    logger.info(f"Title: {rendering.title}")
    logger.info(f"Tags: {rendering.tags}")
    click.echo(rendering.html)


@main.command("check-slugs")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def check_slugs(paths: tuple[str, ...]) -> None:
    """Check that every document has a valid slug."""
    try:
        verify_slugs(paths)
    except SlugValidationError as e:
        _report_slug_violations(e)
        raise click.ClickException(str(e)) from e
    except MarkpressError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"All {len(paths)} slug(s) are valid")


@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--transport",
    type=click.Choice(["rest", "xmlrpc"]),
    default="rest",
    help="WordPress API to use",
)
@click.option(
    "--post-type",
    help="Post type to sync with (default: posts for rest, post for xmlrpc)",
)
@click.option("--post-status", default="draft", help="Status assigned to synced posts")
@click.option(
    "--delete-not-found/--keep-not-found",
    default=False,
    help="Delete remote posts that no local document produced",
)
@click.option(
    "--generate-tags/--no-generate-tags",
    default=False,
    help="Synchronize document tags to WordPress",
)
@click.option(
    "--custom-field",
    "custom_fields",
    multiple=True,
    callback=_parse_custom_fields,
    help="Custom field stored on every post, as KEY=VALUE (repeatable)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=lambda: is_env_truthy(ENV_MARKPRESS_DRY_RUN),
    help="Log intended changes without applying them",
)
@click.option(
    "--skip-slug-check", is_flag=True, help="Do not validate slugs before syncing"
)
@click.option("--json", "as_json", is_flag=True, help="Print the sync result as JSON")
def sync(
    paths: tuple[str, ...],
    transport: str,
    post_type: str | None,
    post_status: str,
    delete_not_found: bool,
    generate_tags: bool,
    custom_fields: dict[str, str],
    dry_run: bool,
    skip_slug_check: bool,
    as_json: bool,
) -> None:
    """Create, update and optionally delete WordPress posts to match PATHS."""
    logger = logging.getLogger(LOGGER_NAME)
    default_post_type = (
        DEFAULT_REST_POST_TYPE if transport == "rest" else DEFAULT_XMLRPC_POST_TYPE
    )
    post_type = post_type or os.getenv(ENV_WORDPRESS_POST_TYPE, default_post_type)

    renderer = Renderer()
    options = SyncOptions(
        delete_not_found=delete_not_found,
        generate_tags=generate_tags,
        post_status=post_status,
        dry_run=dry_run,
    )

    with log_operation(logger, "sync", transport=transport, post_type=post_type):
        try:
            if not skip_slug_check:
                verify_slugs(paths, renderer=renderer)

            config = WordPressConfig.from_env()
            log_config_param(logger, "WordPress", "URL", config.url)
            log_config_param(logger, "WordPress", "Username", config.username)
            log_config_param(
                logger, "WordPress", "Password", config.password, sensitive=True
            )
            syncer_cls = WordPressHttpSyncer if transport == "rest" else WordPressSyncer
            syncer = syncer_cls(config, post_type, renderer, options)
            result = syncer.sync(paths, custom_fields)
        except SlugValidationError as e:
            _report_slug_violations(e)
            raise click.ClickException(str(e)) from e
        except (MarkpressError, ValueError) as e:
            raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    prefix = "[dry run] " if dry_run else ""
    click.echo(
        f"{prefix}created: {len(result.created)}, updated: {len(result.updated)}, "
        f"deleted: {len(result.deleted)}, skipped: {len(result.skipped)}"
    )


__all__ = ["main", "__version__", "setup_logger", "log_operation"]

if __name__ == "__main__":
    main()
