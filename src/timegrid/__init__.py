# SPDX-License-Identifier: MIT

from timegrid.cleanup import register_cleanup
from timegrid.initialize import initialize
from timegrid.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
