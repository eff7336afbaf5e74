"""module-zero — keep dependent packages in sync with a shared base package.

A base package ships three kinds of shared configuration:

    files/            whole files copied into the dependent package
    blocks/           managed blocks rendered inside the dependent's files
    module-zero.yaml  globs, comment styles and devDependencies

What was applied on the last run is recorded under the ``_m0`` key of the
dependent package's package.json, so the next run can clean up whatever the
base package no longer ships.
"""

# Reserved manifest key for the persisted snapshot
STATE_KEY = "_m0"

# Prefix on every error raised by this package
ERROR_PREFIX = "module-zero"
