"""Allow ``python -m graph_policy_keys``."""

from .cli import main

main()
