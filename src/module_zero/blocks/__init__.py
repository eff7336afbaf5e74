"""Managed blocks — delimited regions of generated text inside user files.

A block for a ``#`` style file looks like:
    #! m0-start
    #! module-zero managed block: edits between these markers are overwritten
    ...content from the base package...
    #! m0-end

Anything outside the markers is preserved untouched.
"""

# Token substituted with -start / -end in a comment style template
PLACEHOLDER = "m0"

# Never legitimately part of source text; blocks cannot span it
SENTINEL = "\ufdd1"

# Replaced with the target file's line ending when rendering
NEWLINE_TOKEN = "{newLine}"

WARNING = "module-zero managed block: edits between these markers are overwritten"
