"""
Default settings for terraform-hybrid.

These values encode the directory-layout conventions the backend generator
relies on. Any of them can be overridden through Settings.
"""

# Path segment that marks the root of all provider trees. Everything after
# it in a workspace path becomes the state key for that workspace.
DEFAULT_PROVIDER_ANCHOR = "deploy/provider"

# Directories with this exact name anchor backend generation
DEFAULT_COMPONENT_FOLDER_NAME = "component"

# Never descended into while walking a component folder
DEFAULT_SKIP_DIR_NAMES = (".terraform", "terraform.tfstate.d")

DEFAULT_BACKEND_FILENAME = "backend.tf"

DEFAULT_SETTINGS = {
    "provider_anchor": DEFAULT_PROVIDER_ANCHOR,
    "component_folder_name": DEFAULT_COMPONENT_FOLDER_NAME,
    "skip_dir_names": list(DEFAULT_SKIP_DIR_NAMES),
    "backend_filename": DEFAULT_BACKEND_FILENAME,

    # Terraform binary
    "terraform_binary": "terraform",

    # Seconds; None waits for the command indefinitely
    "command_timeout": None,
}
