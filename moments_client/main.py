import argparse
import asyncio
import json
import mimetypes
import sys
from pathlib import Path
from typing import Any, Sequence

from loguru import logger
from pydantic import ValidationError

from moments_client.composition import create_client_dependencies
from moments_client.core import SERVICE_NAME
from moments_client.domain.errors import (
    InvalidMediaFileError,
    MediaProcessingTimeoutError,
    MomentsApiError,
)
from moments_client.domain.models import CreateMomentInput

EXIT_ERROR = 1
EXIT_INVALID_MEDIA = 2
EXIT_TIMEOUT = 3


def _log(event: str, **kwargs) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moments-upload",
        description="Upload a media file and create a POAP moment referencing it.",
    )
    parser.add_argument("file", type=Path, help="media file to upload")
    parser.add_argument("--author", required=True, help="author address of the moment")
    parser.add_argument("--drop-id", type=int, required=True)
    parser.add_argument("--token-id", type=int, default=None)
    parser.add_argument("--description", default=None)
    parser.add_argument("--content-type", default=None, help="defaults to a guess from the file name")
    parser.add_argument("--timeout-ms", type=int, default=None, help="readiness wait budget")
    return parser


def guess_content_type(path: Path) -> str:
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or "application/octet-stream"


async def run_upload(args: argparse.Namespace) -> dict[str, Any]:
    payload = args.file.read_bytes()
    content_type = args.content_type or guess_content_type(args.file)
    moment_input = CreateMomentInput(
        author=args.author,
        drop_id=args.drop_id,
        token_id=args.token_id,
        description=args.description,
    )

    deps = create_client_dependencies()
    try:
        deps.connect()
        moment = await deps.upload_service.create_moment_with_media(
            payload,
            content_type,
            moment_input,
            timeout_ms=args.timeout_ms,
        )
    finally:
        await deps.close()
    return moment.model_dump(by_alias=True, exclude_none=True)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        moment = asyncio.run(run_upload(args))
    except KeyboardInterrupt:
        _log("upload_interrupted")
        return EXIT_ERROR
    except InvalidMediaFileError as e:
        logger.error("media rejected by the processing service: {}", e)
        return EXIT_INVALID_MEDIA
    except MediaProcessingTimeoutError as e:
        logger.error("media processing did not finish in time: {}", e)
        return EXIT_TIMEOUT
    except (ValidationError, ValueError) as e:
        logger.error("invalid configuration: {}", e)
        return EXIT_ERROR
    except (MomentsApiError, OSError) as e:
        logger.exception("upload failed: {}", e)
        return EXIT_ERROR

    print(json.dumps(moment, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
