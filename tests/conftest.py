import pytest

from ci_dashboard.config import ConfigHelper


@pytest.fixture
def mock_configuration(mocker):
    m = mocker.patch("ci_dashboard.config._get_config_instance")
    mock_config = ConfigHelper()
    m.return_value = mock_config
    our_config = {
        "setup": {"http": {"timeouts": {"connect": 5, "receive": 15}}},
        "circleci": {
            "api_url": "https://circleci.com/api",
            "project_slug": "mui-org/material-ui",
            "token": "circle-token",
        },
        "azure": {
            "api_url": "https://dev.azure.com",
            "organization": "mui-org",
            "project": "material-ui",
        },
        "s3": {"artifact_server": "https://artifacts.example.com/bucket"},
        "size_comparison": {"cache_epoch": "v7"},
    }
    mock_config.set_params(our_config)
    return mock_config


@pytest.fixture
def sample_base_snapshot():
    return {
        "@material-ui/core/Button": {"parsed": 10000, "gzip": 4000},
        "@material-ui/core/Textarea": {"parsed": 3000, "gzip": 1200},
        "@material-ui/core/Popper.esm": {"parsed": 7000, "gzip": 2500},
        "docs.main": {"parsed": 500000, "gzip": 150000},
        "docs:/components/buttons": {"parsed": 20000, "gzip": 6000},
        "docs:/getting-started": {"parsed": 8000, "gzip": 3000},
    }


@pytest.fixture
def sample_target_snapshot():
    return {
        "@material-ui/core/Button": {"parsed": 10250, "gzip": 4080},
        "@material-ui/core/Textarea": {"parsed": 3000, "gzip": 1200},
        "@material-ui/core/Slider": {"parsed": 9000, "gzip": 3300},
        "docs.main": {"parsed": 499000, "gzip": 149800},
        "docs:/components/buttons": {"parsed": 20000, "gzip": 6010},
        "docs:/components/slider": {"parsed": 12000, "gzip": 4000},
    }
