"""
terraform-hybrid - backend.tf generation and Terraform workspace helpers.
"""

__version__ = "0.9.0"
