"""Starter .transdiff.toml template."""

DEFAULT_TOML = """\
# transdiff configuration
version = "1.0"

[languages]
langs = ["en", "de"]      # first one is the base language unless `base` is set
# base = "en"

[discovery]
glob = "SUB"              # SUB (%l/**.%e) | EXT (**.%l.%e) | custom pattern with %l
extensions = ["md"]       # empty = any extension

[git]
enabled = true
# from_revision = "HEAD"  # older end of the range
# to_revision = ""        # newer end, empty = working copy

[output]
format = "terminal"       # terminal | json
absolute_paths = false
show_diff = false
show_summary = true

[check]
fail_on_diffs = false     # exit 1 when missing or stale translations are found
"""
