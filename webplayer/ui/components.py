"""
UI Components - Standardized Rich components for consistent interface.

This module provides the tables and panels the CLI commands render: scraped
items, API search results, episodes, servers, favorites and settings.
"""

from typing import Any, Dict, List, Optional

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from webplayer.api.models import (
    Anime,
    AnimeDetails,
    Episode,
    ServerList,
    WeebFullData,
    WeebSearchResult,
)
from webplayer.core.models import FavoriteItem, ScrapedItem, WatchStatus


STATUS_STYLES = {
    WatchStatus.PLAN_TO_WATCH: "status.plan",
    WatchStatus.WATCHING: "status.watching",
    WatchStatus.COMPLETED: "status.completed",
    WatchStatus.ON_HOLD: "status.hold",
    WatchStatus.DROPPED: "status.dropped",
}


def _cell(value: Optional[Any], placeholder: str = "[muted]-[/muted]") -> str:
    if value is None or value == "":
        return placeholder
    return escape(str(value))


class UIComponents:
    """Collection of standardized UI components with consistent styling."""

    def create_panel(
        self,
        content: Any,
        title: Optional[str] = None,
        subtitle: Optional[str] = None,
        border_style: str = "panel.border",
        padding: tuple = (1, 2),
        expand: bool = True
    ) -> Panel:
        """
        Create a styled panel with consistent theming.

        Args:
            content: Panel content
            title: Panel title
            subtitle: Panel subtitle
            border_style: Border style override
            padding: Panel padding (vertical, horizontal)
            expand: Whether panel should expand to full width

        Returns:
            Styled Panel object
        """
        return Panel(
            content,
            title=title,
            subtitle=subtitle,
            border_style=border_style,
            padding=padding,
            expand=expand
        )

    def _table(self, title: Optional[str] = None, show_lines: bool = False) -> Table:
        return Table(
            title=title,
            show_header=True,
            header_style="table.header",
            border_style="panel.border",
            show_lines=show_lines,
            expand=True
        )

    def create_scraped_items_table(self, items: List[ScrapedItem], source: str = "") -> Table:
        """
        Create a table displaying scraped items.

        Args:
            items: Items in extraction order
            source: Hostname shown in the title

        Returns:
            Formatted table with one row per item
        """
        title = f"🕸️  Scraped Items from {source}" if source else "🕸️  Scraped Items"
        table = self._table(title)
        table.add_column("#", style="muted", width=4, justify="right")
        table.add_column("Title", style="title", ratio=2)
        table.add_column("Link", style="link", ratio=2, overflow="fold")
        table.add_column("Image", style="muted", ratio=1, overflow="fold")

        for i, item in enumerate(items, 1):
            table.add_row(str(i), escape(item.title), _cell(item.link), _cell(item.image_url))

        return table

    def create_anime_table(self, results: List[Anime], title: str = "🔍 Search Results") -> Table:
        """Create a table of HiAnime cards."""
        table = self._table(title)
        table.add_column("#", style="muted", width=4, justify="right")
        table.add_column("Title", style="title", ratio=3)
        table.add_column("ID", style="secondary", ratio=2)
        table.add_column("Sub", justify="right", width=5)
        table.add_column("Dub", justify="right", width=5)

        for i, anime in enumerate(results, 1):
            episodes = anime.episodes
            table.add_row(
                str(i),
                escape(anime.title),
                escape(anime.id),
                _cell(episodes.sub if episodes else None),
                _cell(episodes.dub if episodes else None),
            )

        return table

    def create_weeb_results_table(self, results: List[WeebSearchResult]) -> Table:
        """Create a table of Weeb API search hits."""
        table = self._table("🔍 Search Results")
        table.add_column("#", style="muted", width=4, justify="right")
        table.add_column("Title", style="title", ratio=3)
        table.add_column("ID", style="secondary", ratio=2, overflow="fold")
        table.add_column("Session", style="muted", ratio=2, overflow="fold")

        for i, result in enumerate(results, 1):
            table.add_row(str(i), escape(result.title), escape(result.id), escape(result.session))

        return table

    def create_episodes_table(self, episodes: List[Episode]) -> Table:
        table = self._table("📺 Episodes")
        table.add_column("#", style="muted", width=5, justify="right")
        table.add_column("Title", style="title", ratio=2)
        table.add_column("Episode ID", style="secondary", ratio=2, overflow="fold")

        for i, episode in enumerate(episodes, 1):
            table.add_row(str(i), escape(episode.title), escape(episode.id))

        return table

    def create_servers_table(self, servers: ServerList) -> Table:
        """Create a table of servers grouped by sub and dub."""
        table = self._table("🖥️  Servers")
        table.add_column("Type", style="accent", width=5)
        table.add_column("Name", style="title")
        table.add_column("ID", style="muted")

        for server_type, entries in (("sub", servers.sub), ("dub", servers.dub)):
            for server in entries:
                table.add_row(server_type, _cell(server.name), _cell(server.id))

        return table

    def create_favorites_table(self, favorites: List[FavoriteItem]) -> Table:
        """
        Create a table displaying saved favorites.

        Args:
            favorites: Favorites in insertion order

        Returns:
            Formatted table with watch status coloring
        """
        table = self._table("⭐ Favorites")
        table.add_column("ID", style="secondary", ratio=1)
        table.add_column("Title", style="title", ratio=2)
        table.add_column("Type", width=7)
        table.add_column("Status", width=14)
        table.add_column("Added", style="muted", width=10)

        for favorite in favorites:
            style = STATUS_STYLES.get(favorite.watch_status, "info")
            table.add_row(
                escape(favorite.id),
                escape(favorite.title),
                favorite.content_type.value,
                f"[{style}]{favorite.watch_status.value}[/{style}]",
                favorite.date_added.strftime("%Y-%m-%d"),
            )

        return table

    def create_details_panel(self, details: AnimeDetails) -> Panel:
        """Create a panel describing one anime."""
        lines = [f"[title]{escape(details.title)}[/title]"]

        meta = [part for part in (details.type, details.status) if part]
        if meta:
            lines.append(f"[muted]{escape(' • '.join(meta))}[/muted]")
        if details.genres:
            lines.append(f"[dim]Genres:[/dim] {escape(', '.join(details.genres))}")

        lines.append(
            f"[dim]Episodes:[/dim] sub {_cell(details.episodes.sub)} / dub {_cell(details.episodes.dub)}"
        )
        if details.synopsis:
            lines.append(f"\n{escape(details.synopsis)}")

        return self.create_panel("\n".join(lines), title=f"📋 {escape(details.id)}")

    def create_weeb_details_panel(self, data: WeebFullData) -> Panel:
        """Create a panel with synopsis and episode links of a Weeb entry."""
        lines = [f"[title]{escape(data.title)}[/title]", "", escape(data.synopsis)]

        if data.episodes:
            lines.append("")
            for label, link in data.episodes.items():
                lines.append(f"[accent]{escape(label)}[/accent] [link]{escape(link)}[/link]")

        return self.create_panel("\n".join(lines), title="📋 Details")

    def create_settings_table(self, settings: Dict[str, Any], title: str = "⚙️  Settings") -> Table:
        """Create a key/value table of flattened settings."""
        table = self._table(title)
        table.add_column("Setting", style="secondary")
        table.add_column("Value", style="title", overflow="fold")

        for key, value in settings.items():
            table.add_row(escape(key), _cell(value, placeholder="[muted](empty)[/muted]"))

        return table


# Export UI components
__all__ = ["UIComponents", "STATUS_STYLES"]
