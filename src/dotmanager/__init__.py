"""dotmanager — track dotfiles in a bare git repository."""

__version__ = "0.3.0"
