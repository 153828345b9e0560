from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from .config import ActionConfig
from .context import EventContext
from .environment import EnvironmentSnapshot
from .errors import CommandFailed
from .logging import ZeklinLogger
from .models import UploadPayload
from .provenance import assemble
from .results import find_results
from .runner import run_commands
from .uploader import ZeklinClient


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _describe(commands: tuple[str, ...]) -> str:
    return " && ".join(commands)


async def run(
    config: ActionConfig,
    env: EnvironmentSnapshot,
    context: EventContext,
    logger: ZeklinLogger,
    *,
    client: Optional[ZeklinClient] = None,
    clock: Callable[[], datetime] = _utcnow,
) -> UploadPayload:
    """
    Run the benchmark and upload its results.

    Stages run strictly in order and the first failure aborts the rest:
    command, results file, liveness check, payload, upload.
    """
    if client is None:
        client = ZeklinClient(
            server_url=env.server_url,
            api_key_id=config.api_key_id,
            api_key=config.api_key.get_secret_value(),
            logger=logger,
        )

    label = _describe(config.cmd)

    with logger.stage("command"):
        try:
            exit_code = await run_commands(config.cmd, config.workdir, logger)
        except OSError as exc:
            raise CommandFailed(None, f"'{label}' could not be started: {exc}") from exc
        if exit_code != 0:
            raise CommandFailed(
                exit_code, f"'{label}' exited with non-zero exit code: {exit_code}"
            )
        computed_at = clock()
        logger.info(f"'{label}' ran successfully")

    with logger.stage("results"):
        results = find_results(config.output_file_path, config.workdir, logger)

    with logger.stage("liveness"):
        await client.liveness()

    payload = assemble(env, context, computed_at, results)

    with logger.stage("upload"):
        await client.upload(payload)

    return payload
