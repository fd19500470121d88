# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Reserved annotation keys for flag metadata.

Each `Flag` carries an `annotations` mapping of `str -> list[str]`. The keys
below are reserved by cmdtree; anything else is free for applications.
`BASH_COMP_ONE_REQUIRED_FLAG` is the only key the core reads: a flag whose
first value under it is `"true"` must be set by the user.
"""

BASH_COMP_FILENAME_EXT = "cli_annotation_bash_completion_filename_extensions"
BASH_COMP_CUSTOM = "cli_annotation_bash_completion_custom"
BASH_COMP_ONE_REQUIRED_FLAG = "cli_annotation_bash_completion_one_required_flag"
BASH_COMP_SUBDIRS_IN_DIR = "cli_annotation_bash_completion_subdirs_in_dir"

__all__ = [
    "BASH_COMP_FILENAME_EXT",
    "BASH_COMP_CUSTOM",
    "BASH_COMP_ONE_REQUIRED_FLAG",
    "BASH_COMP_SUBDIRS_IN_DIR",
]
