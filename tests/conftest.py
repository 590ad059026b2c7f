"""Shared test setup: isolate Settings from the caller's environment."""

import os

# Settings() reads CALLORDER_* variables; drop any inherited from the
# shell so every test starts from the defaults.
for _key in [k for k in os.environ if k.startswith("CALLORDER_")]:
    del os.environ[_key]
