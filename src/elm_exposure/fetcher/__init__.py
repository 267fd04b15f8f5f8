"""Fetcher module for finding module files and their candidate tests."""

from elm_exposure.fetcher.candidates import (
    TestModule,
    find_candidate_tests,
    iter_module_files,
    load_candidates,
    module_name_from_path,
)
from elm_exposure.fetcher.file_walker import (
    DEFAULT_MODULE_EXTENSIONS,
    DEFAULT_SKIP_DIRS,
    ModuleFile,
    ModuleFilter,
    ModuleWalker,
    create_module_walker,
)

__all__ = [
    "DEFAULT_MODULE_EXTENSIONS",
    "DEFAULT_SKIP_DIRS",
    "ModuleFile",
    "ModuleFilter",
    "ModuleWalker",
    "TestModule",
    "create_module_walker",
    "find_candidate_tests",
    "iter_module_files",
    "load_candidates",
    "module_name_from_path",
]
