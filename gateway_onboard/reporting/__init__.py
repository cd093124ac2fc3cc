from .format import render_sync_report

__all__ = ["render_sync_report"]
