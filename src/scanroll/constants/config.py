"""Configuration defaults, file names and environment variable names."""

from __future__ import annotations

CONFIG_FILENAME: str = "scanroll.yaml"

DEFAULT_BRANCH: str = "main"
DEFAULT_OUTPUT_DIR: str = "./output"
DEFAULT_REQUEST_TIMEOUT_SECONDS: int = 30
DEFAULT_MAX_WORKERS: int = 1

DEFAULT_GITHUB_BASE_URL: str = "https://api.github.com"
DEFAULT_AZURE_DEVOPS_BASE_URL: str = "https://advsec.dev.azure.com"

ENV_GITHUB_ORG_NAME: str = "GITHUB_ORG_NAME"
ENV_GITHUB_TOKEN: str = "GITHUB_TOKEN"
ENV_GITHUB_BASE_URL: str = "GITHUB_BASE_URL"
ENV_GITHUB_APP_NAMES: str = "GITHUB_APP_NAMES"
ENV_AZURE_DEVOPS_ORG_NAME: str = "AZURE_DEVOPS_ORG_NAME"
ENV_AZURE_DEVOPS_PROJECT_NAME: str = "AZURE_DEVOPS_PROJECT_NAME"
ENV_AZURE_DEVOPS_TOKEN: str = "AZURE_DEVOPS_TOKEN"
ENV_AZURE_DEVOPS_BASE_URL: str = "AZURE_DEVOPS_BASE_URL"
ENV_AZURE_DEVOPS_APP_NAMES: str = "AZURE_DEVOPS_APP_NAMES"
ENV_BRANCH_NAME: str = "BRANCH_NAME"
ENV_OUTPUT_DIR: str = "OUTPUT_DIR"

# Separator for the Azure DevOps ``project/repository`` application form.
AZURE_PROJECT_SEPARATOR: str = "/"
