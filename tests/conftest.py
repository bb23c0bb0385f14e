"""
Shared fixtures: provider trees and config files under tmp_path.
"""

import logging
import textwrap

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Keep setup_logging() calls made by the CLI from leaking between tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def deploy_root(tmp_path):
    """Return <tmp>/deploy/provider, created."""
    root = tmp_path / "deploy" / "provider"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def provider_tree(deploy_root):
    """
    Build an aws provider tree::

        deploy/provider/aws/
            acct-a/component/{vpc,eks/nodes}
            acct-a/component/vpc/.terraform/modules
            acct-a/component/vpc/terraform.tfstate.d/dev
            acct-b/component/rds
            shared/notes            (no component folder)
    """
    aws = deploy_root / "aws"
    for rel in (
        "acct-a/component/vpc/.terraform/modules",
        "acct-a/component/vpc/terraform.tfstate.d/dev",
        "acct-a/component/eks/nodes",
        "acct-b/component/rds",
        "shared/notes",
    ):
        (aws / rel).mkdir(parents=True)
    return deploy_root


@pytest.fixture
def write_config(tmp_path):
    """Write a YAML config file named `name` and return its path as str."""
    def _write(content: str, name: str = "aws.yaml") -> str:
        path = tmp_path / "configs" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content))
        return str(path)
    return _write
