"""devenv-bootstrap — Clang-built Python + Boost development environment."""

__version__ = "0.1.0"
