from __future__ import annotations

import asyncio
import sys
import uuid

from .config import ActionConfig
from .constants import ExitCode
from .context import EventContext
from .environment import EnvironmentSnapshot
from .errors import ZeklinError
from .logging import ZeklinLogger
from .pipeline import run


def main() -> int:
    """Main entry point."""
    return asyncio.run(async_main())


def _set_failed(logger: ZeklinLogger, exc: ZeklinError) -> int:
    logger.error(str(exc), error_type=type(exc).__name__)
    cause = exc.__cause__
    if cause is not None:
        logger.debug("failure_cause", cause=repr(cause))
    return int(exc.exit_code)


async def async_main() -> int:
    """Async main entry point."""
    logger = ZeklinLogger(str(uuid.uuid4()))

    try:
        env = EnvironmentSnapshot.from_environment()
        logger.debug("environment", **env.debug_fields())

        config = ActionConfig.from_inputs()
        logger.debug(
            "configuration",
            cmd=list(config.cmd),
            output_file_path=config.output_file_path,
            workdir=config.workdir,
        )

        context = EventContext.from_environment()
        logger.debug(
            "event_context",
            event_name=context.event_name,
            ref=context.ref,
            action=context.action,
            is_pull_request=context.is_pull_request,
        )

        await run(config, env, context, logger)
    except ZeklinError as exc:
        return _set_failed(logger, exc)

    logger.info("Benchmark results uploaded to Zeklin", workflow_url=env.workflow_url)
    return int(ExitCode.SUCCESS)


if __name__ == "__main__":
    sys.exit(main())
