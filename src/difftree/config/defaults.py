"""Default configuration values and starter .difftree.toml template."""

DEFAULT_TOML = """\
# difftree configuration
version = "1.0"

[output]
format = "terminal"       # terminal | json
show_counts = true

[tree]
collation = "uca"         # uca | casefold | locale | ordinal
expand = "all"            # all | top | none
"""

FULL_TOML = DEFAULT_TOML + """
[ignore]
# paths = ["*.lock", "vendor/*"]
"""
