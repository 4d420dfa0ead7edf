import asyncio
import os

import click
from dotenv import load_dotenv

__version__ = "0.1.0"

from .logging_config import log_operation, setup_logger

logger = setup_logger(log_to_file=False)


@click.command()
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
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default=lambda: os.getenv("TRANSPORT", "stdio"),
    help="Transport type (stdio, sse or streamable-http)",
)
@click.option(
    "--host",
    default=lambda: os.getenv("HOST", "0.0.0.0"),
    help="Host to bind to for HTTP transports",
)
@click.option(
    "--port",
    type=int,
    default=lambda: int(os.getenv("PORT", "8000")),
    help="Port to listen on for HTTP transports",
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
@click.option(
    "--server",
    "forgejo_url",
    help="Forgejo/Gitea base URL (e.g., https://codeberg.org)",
)
@click.option("--token", "forgejo_token", help="Forgejo access token")
@click.option(
    "--ssl-verify/--no-ssl-verify",
    default=None,
    help="Verify SSL certificates of the Forgejo server (default: verify)",
)
@click.option(
    "--timeout",
    type=float,
    help="Request timeout in seconds (default: 30)",
)
@click.option(
    "--read-only",
    is_flag=True,
    help="Run in read-only mode (disables all write operations)",
)
@click.option(
    "--enabled-tools",
    help="Comma-separated list of tools to enable (enables all if not specified)",
)
@click.option(
    "--toolsets",
    help="Comma-separated list of toolsets to enable ('all', 'default' or names)",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    host: str,
    port: int,
    log_dir: str | None,
    log_to_file: bool,
    forgejo_url: str | None,
    forgejo_token: str | None,
    ssl_verify: bool | None,
    timeout: float | None,
    read_only: bool,
    enabled_tools: str | None,
    toolsets: str | None,
) -> None:
    """Forgejo MCP Server - Forgejo and Gitea repository tools for MCP

    Exposes issues, labels, milestones, releases, pull requests, wiki pages
    and Actions tasks of a Forgejo or Gitea instance.
    """
    logging_level = "WARNING"
    if verbose == 1:
        logging_level = "INFO"
    elif verbose >= 2:
        logging_level = "DEBUG"

    setup_logger(
        name="forgejo-mcp",
        level=logging_level,
        log_to_file=log_to_file,
        log_dir=log_dir,
    )

    with log_operation(logger, "application_startup", app_version=__version__):
        if env_file:
            logger.info(f"Loading environment from file: {env_file}")
            load_dotenv(env_file)
        else:
            logger.debug("Attempting to load environment from default .env file")
            load_dotenv()

        if forgejo_url:
            os.environ["FORGEJO_URL"] = forgejo_url
        if forgejo_token:
            os.environ["FORGEJO_TOKEN"] = forgejo_token
        if ssl_verify is not None:
            os.environ["FORGEJO_SSL_VERIFY"] = str(ssl_verify).lower()
        if timeout is not None:
            os.environ["FORGEJO_TIMEOUT"] = str(timeout)
        if read_only:
            os.environ["READ_ONLY_MODE"] = "true"
        if enabled_tools:
            os.environ["ENABLED_TOOLS"] = enabled_tools
        if toolsets:
            os.environ["TOOLSETS"] = toolsets
        if log_dir:
            os.environ["LOG_DIR"] = log_dir

        from .servers import main_mcp

        logger.info(f"Starting Forgejo MCP v{__version__} with {transport} transport")

    run_kwargs: dict = {"transport": transport}
    if transport != "stdio":
        run_kwargs.update(host=host, port=port)
    asyncio.run(main_mcp.run_async(**run_kwargs))


__all__ = ["main", "__version__", "setup_logger", "log_operation"]

if __name__ == "__main__":
    main()
