"""TECHY project manager: users, projects and project memberships over a relational store."""

__version__ = "1.0.0"
