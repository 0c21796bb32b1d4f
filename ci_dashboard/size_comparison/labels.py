import re

PAGE_BUNDLE_PREFIX = "docs:"

_main_bundle_labels = {
    "packages/material-ui/build/umd/material-ui.production.min.js": "@material-ui/core[umd]",
    "@material-ui/core/Textarea": "TextareaAutosize",
    "docs.main": "docs:/_app",
    "docs.landing": "docs:/",
}

_core_prefix = re.compile(r"^@material-ui/core/")
_esm_suffix = re.compile(r"\.esm$")


def is_page_bundle(bundle_id: str) -> bool:
    return bundle_id.startswith(PAGE_BUNDLE_PREFIX)


def get_main_bundle_label(bundle_id: str) -> str:
    if bundle_id in _main_bundle_labels:
        return _main_bundle_labels[bundle_id]
    return _esm_suffix.sub("", _core_prefix.sub("", bundle_id))


def get_page_bundle_label(bundle_id: str) -> str:
    # a page
    if bundle_id.startswith(f"{PAGE_BUNDLE_PREFIX}/"):
        return bundle_id[len(PAGE_BUNDLE_PREFIX) :]
    # shared
    return bundle_id
