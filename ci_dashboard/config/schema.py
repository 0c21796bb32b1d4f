"""Configuration options that affect an entire instance of the dashboard"""

import logging

from cerberus import Validator

log = logging.getLogger(__name__)

timeouts_fields = {
    "connect": {"type": "number", "min": 0},
    "receive": {"type": "number", "min": 0},
}

config_schema = {
    "setup": {
        "type": "dict",
        "schema": {
            "http": {
                "type": "dict",
                "schema": {"timeouts": {"type": "dict", "schema": timeouts_fields}},
            },
        },
    },
    "circleci": {
        "type": "dict",
        "schema": {
            "api_url": {"type": "string"},
            # owner/name of the project on github
            "project_slug": {"type": "string", "regex": r"^[^/]+/[^/]+$"},
            # sent as `Circle-Token`; only needed for the job/pipeline endpoints
            "token": {"type": "string", "nullable": True},
        },
    },
    "azure": {
        "type": "dict",
        "schema": {
            "api_url": {"type": "string"},
            "organization": {"type": "string"},
            "project": {"type": "string"},
        },
    },
    "s3": {
        "type": "dict",
        "schema": {"artifact_server": {"type": "string"}},
    },
    "size_comparison": {
        "type": "dict",
        "schema": {
            # bump to invalidate every cache key derived from comparison params
            "cache_epoch": {"type": "string", "empty": False},
        },
    },
}


def validate_install_configuration(inputted_dict):
    validator = Validator(config_schema, allow_unknown=True)
    is_valid = validator.validate(inputted_dict)
    if not is_valid:
        log.warning(
            "Configuration considered invalid, using dict as it is",
            extra=dict(errors=validator.errors),
        )
        return inputted_dict
    return validator.document
