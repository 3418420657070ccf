"""
Error Handler - Error panels with context and suggestions.

This module provides consistent error display across the CLI. Each
WebPlayer error type gets its own panel title, the fields relevant to it and
a short list of actionable suggestions.
"""

import traceback
from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from webplayer.core.exceptions import (
    APIError,
    APIErrorKind,
    ConfigurationError,
    DecodeError,
    NetworkError,
    ScrapeError,
    ScrapeErrorKind,
    SearchError,
    StorageError,
    WebPlayerError,
)
from webplayer.ui.console import get_console


SCRAPE_SUGGESTIONS = {
    ScrapeErrorKind.INVALID_URL: [
        "Check the URL for typos",
        "Include the host name, e.g. [cyan]animepahe.ru[/cyan]",
    ],
    ScrapeErrorKind.NETWORK_FAILURE: [
        "Check your internet connection",
        "Verify the site is reachable in a browser",
        "Try again in a few moments",
    ],
    ScrapeErrorKind.NO_DATA: [
        "The page returned an empty response",
        "The site may require JavaScript or be blocking automated requests",
    ],
    ScrapeErrorKind.PARSING_ERROR: [
        "The page is not UTF-8 encoded HTML",
        "Try the listing page of the site instead of a media file",
    ],
}

API_SUGGESTIONS = {
    APIErrorKind.INVALID_URL: ["Check the identifier or query you passed"],
    APIErrorKind.NETWORK_ERROR: [
        "Check your internet connection",
        "Hosted APIs may be waking up, retry in a minute",
    ],
    APIErrorKind.DECODING_ERROR: ["The API changed its response format"],
    APIErrorKind.INVALID_RESPONSE: [
        "The API rejected the request",
        "Verify the base URL with [cyan]webplayer config show[/cyan]",
    ],
}


class ErrorHandler:
    """Handles error display with consistent formatting and helpful context."""

    @property
    def console(self) -> Console:
        return get_console()

    def handle_error(
        self,
        error: Exception,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """
        Handle and display an error with appropriate formatting.

        Args:
            error: Exception to handle
            context: Additional context about where the error occurred
            show_traceback: Whether to show the full traceback
        """
        if isinstance(error, WebPlayerError):
            title, fields, suggestions = self._describe(error)
            message = error.message
            details = error.details
        else:
            title = "💥 Unexpected Error"
            fields = []
            suggestions = [
                "Check the command syntax and arguments",
                "Run again with [cyan]--debug[/cyan] for more information",
                "Report this issue if it persists",
            ]
            message = f"{error.__class__.__name__}: {error}"
            details = None

        self._render(title, message, fields, suggestions, context, details, show_traceback)

    def _describe(self, error: WebPlayerError) -> Tuple[str, List[Tuple[str, str]], List[str]]:
        """Panel title, extra fields and suggestions for a WebPlayer error."""
        if isinstance(error, ScrapeError):
            fields = [("URL", error.url), ("Reason", error.kind.value)]
            return "🕸️  Scrape Error", fields, SCRAPE_SUGGESTIONS.get(error.kind, [])

        if isinstance(error, APIError):
            fields = [("URL", error.url), ("Status Code", error.status_code), ("Reason", error.kind.value)]
            return "🌐 API Error", fields, API_SUGGESTIONS.get(error.kind, [])

        if isinstance(error, DecodeError):
            fields = [("Field", error.field_name), ("Reason", error.kind.value)]
            suggestions = [
                "The server returned a stream link in an unknown format",
                "Try another server with [cyan]webplayer servers[/cyan]",
            ]
            return "🧩 Decode Error", fields, suggestions

        if isinstance(error, SearchError):
            fields = [("Query", error.query), ("Source", error.source)]
            suggestions = [
                "Try different search terms or keywords",
                "Switch source with [cyan]--source[/cyan]",
            ]
            return "🔍 Search Error", fields, suggestions

        if isinstance(error, ConfigurationError):
            suggestions = [
                "Check configuration file syntax and format",
                "Inspect settings with [cyan]webplayer config show[/cyan]",
                "Reset to defaults with [cyan]webplayer config reset[/cyan]",
            ]
            return "⚙️  Configuration Error", [("Configuration file", error.config_path)], suggestions

        if isinstance(error, StorageError):
            suggestions = [
                "Verify the data directory is writable",
                "A corrupted store is backed up next to the original file",
            ]
            return "💾 Storage Error", [("Path", error.path)], suggestions

        if isinstance(error, NetworkError):
            fields = [("URL", error.url), ("Status Code", error.status_code)]
            return "🌐 Network Error", fields, ["Check your internet connection"]

        return "❌ Error", [], []

    def _render(
        self,
        title: str,
        message: str,
        fields: List[Tuple[str, object]],
        suggestions: List[str],
        context: Optional[str],
        details: object,
        show_traceback: bool
    ) -> None:
        content_parts = [f"[error]{escape(message)}[/error]"]

        for label, value in fields:
            if value is not None and value != "":
                content_parts.append(f"[dim]{label}:[/dim] [cyan]{escape(str(value))}[/cyan]")

        if context:
            content_parts.append(f"[dim]Context:[/dim] {escape(context)}")

        if suggestions:
            content_parts.append("\n[info]💡 Suggestions:[/info]")
            for suggestion in suggestions:
                content_parts.append(f"• {suggestion}")

        if show_traceback:
            if details:
                content_parts.append(f"\n[dim]Details:[/dim]\n{escape(str(details))}")
            content_parts.append(f"\n[dim]Traceback:[/dim]\n{escape(traceback.format_exc())}")

        panel = Panel(
            "\n".join(content_parts),
            title=title,
            border_style="error",
            padding=(1, 2)
        )

        self.console.print(panel)

    def display_warning(self, message: str, title: str = "⚠️  Warning") -> None:
        """Display a warning message."""
        panel = Panel(
            f"[warning]{message}[/warning]",
            title=f"[warning]{title}[/warning]",
            border_style="warning",
            padding=(1, 2)
        )

        self.console.print(panel)

    def display_info(self, message: str, title: str = "ℹ️  Information") -> None:
        """Display an information message."""
        panel = Panel(
            f"[info]{message}[/info]",
            title=f"[info]{title}[/info]",
            border_style="info",
            padding=(1, 2)
        )

        self.console.print(panel)


# Global error handler instance
_error_handler = ErrorHandler()


def handle_error(
    error: Exception,
    context: Optional[str] = None,
    show_traceback: bool = False
) -> None:
    """
    Handle and display an error using the global error handler.

    Args:
        error: Exception to handle
        context: Additional context
        show_traceback: Whether to show traceback
    """
    _error_handler.handle_error(error, context, show_traceback)


def display_warning(message: str, title: str = "⚠️  Warning") -> None:
    """Display a warning message using the global error handler."""
    _error_handler.display_warning(message, title)


def display_info(message: str, title: str = "ℹ️  Information") -> None:
    """Display an information message using the global error handler."""
    _error_handler.display_info(message, title)


# Export error handling functions
__all__ = [
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
]
