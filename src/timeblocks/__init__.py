# SPDX-License-Identifier: MIT

from timeblocks.cleanup import register_cleanup
from timeblocks.initialize import initialize
from timeblocks.repository.storage import PersistenceError
from timeblocks.terminal.app import run
from timeblocks.terminal.notify import notify_error


def main() -> None:
    try:
        initialize()
    except PersistenceError as error:
        notify_error(f"Loading tracker data failed: {error}")
        raise SystemExit(1)
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
