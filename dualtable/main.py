import sys

from .debug import print_state
from .shared import printf
from .table import Mode, NotFound, Table, set_debug_trace_resize


def format_lookup(value) -> str:
    if isinstance(value, NotFound):
        return "null"
    return str(value)


def demo_chaining():
    printf("=== DEMO: Chaining Mode ===\n")
    t = Table(8, 0.7, Mode.CHAINING)

    t.add("A", 1)
    t.add("B", 2)
    t.add("C", 3)

    print_state(t)
    printf("Get B = {0:s}\n", format_lookup(t.get("B")))
    t.remove("B")
    print_state(t)


def demo_open_addressing():
    printf("=== DEMO: Linear Probing Mode ===\n")
    t = Table(8, 0.7, Mode.OPEN_ADDRESSING)

    for key, value in zip("ABCD", range(1, 5)):
        t.add(key, value)

    print_state(t)
    printf("Get C = {0:s}\n", format_lookup(t.get("C")))
    t.remove("B")
    print_state(t)

    for key, value in zip("EFGHI", range(5, 10)):
        t.add(key, value)

    print_state(t)


def main(argv: list[str] | None = None):
    args = sys.argv[1:] if argv is None else argv

    if len(args) > 1 or (args and args[0] not in ("chaining", "open-addressing")):
        printf("Usage: dualtable [chaining|open-addressing]\n")
        sys.exit(64)

    set_debug_trace_resize(True)
    try:
        if not args or args[0] == "chaining":
            demo_chaining()
        if not args:
            printf("\n")
        if not args or args[0] == "open-addressing":
            demo_open_addressing()
    finally:
        set_debug_trace_resize(False)
