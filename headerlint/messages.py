import sys

from termcolor import colored

###############################################################################
# Output prefixes
###############################################################################

# stdout carries only the suggested header, everything else goes to stderr

CHECKMARK    = '[' + colored("✓", "green") + ']'
CROSSMARK    = '[' + colored("✗", "red") + ']'
INFOMARK     = '[' + colored("i", "blue") + ']'

def _message(prefix: str, raw_prefix: str, *args):
    msg = '\n'.join(str(arg) for arg in args)
    first = True
    for line in msg.split('\n'):
        if first: print(f"{prefix} {line}", file=sys.stderr)
        else:     print(f"{' ' * len(raw_prefix)} {line}", file=sys.stderr)
        first = False

# Use CROSSMARK for errors
def error(*msg): _message(CROSSMARK, '[✗]', *msg)

# Use INFOMARK for information
def info(*msg): _message(INFOMARK, '[i]', *msg)

# Use CHECKMARK for success
def success(*msg): _message(CHECKMARK, '[✓]', *msg)


def diag(line: str = '') -> None:
    """
    Writes an unprefixed line to the diagnostic stream.
    """
    print(line, file=sys.stderr)
