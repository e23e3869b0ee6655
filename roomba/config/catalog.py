from __future__ import annotations

from roomba.models.enums import Category
from roomba.models.job import JobSpec

# Static "what to delete" data.  Each category letter expands to these jobs,
# in this order.  Paths may use ~ and glob wildcards.

CATALOG: dict[Category, tuple[JobSpec, ...]] = {
    Category.BROWSERS: (
        # Cookies are deliberately not targeted.
        JobSpec(
            label="Cleaning Browser History & Bookmarks",
            candidates=(
                "~/.mozilla/firefox/*/places.sqlite",
                "~/.config/chromium/Default/History",
            ),
        ),
        JobSpec(
            label="Cleaning Browser Caches",
            candidates=("~/.cache/mozilla/firefox", "~/.cache/chromium"),
        ),
    ),
    Category.OS_HISTORY: (
        JobSpec(
            label="Emptying Trash",
            candidates=("~/.local/share/Trash/files", "~/.local/share/Trash/info"),
            recreate=True,
        ),
        JobSpec(
            label="Cleaning Recently Used Files List",
            candidates=("~/.local/share/recently-used.xbel", "~/.local/share/RecentDocuments"),
        ),
        JobSpec(
            label="Cleaning Thumbnail Cache",
            candidates=("~/.cache/thumbnails",),
            recreate=True,
        ),
        JobSpec(
            label="Cleaning Terminal Command History",
            candidates=("~/.bash_history",),
        ),
    ),
    Category.APP_HISTORY: (
        JobSpec(
            label="Cleaning File Access & Media History",
            candidates=(
                "~/.local/share/gvfs-metadata",
                "~/.local/share/vlc/ml.xspf",
                "~/.config/gtk-3.0/bookmarks",
                "~/.config/celluloid/watch_later",
            ),
        ),
        JobSpec(
            label="Cleaning VSCodium History",
            candidates=(
                "~/.config/VSCodium/Backups",
                "~/.config/VSCodium/logs",
                "~/.config/VSCodium/User/History",
                "~/.config/VSCodium/User/workspaceStorage",
            ),
        ),
        JobSpec(
            label="Cleaning Konversation (IRC) Logs",
            candidates=("~/.local/share/konversation/logs",),
        ),
    ),
    Category.APP_CACHES: (
        # Crash reports only; Electron cookie stores are left alone.
        JobSpec(
            label="Cleaning Electron App History (Crashpads, Logs)",
            candidates=(
                "~/.config/balenaEtcher/Crashpad",
                "~/.config/balenaEtcher/sentry",
                "~/.config/Stacher7/Crashpad",
            ),
        ),
        JobSpec(
            label="Cleaning NordVPN Cache Logs",
            candidates=("~/.cache/nordvpn",),
        ),
    ),
    Category.AI_HISTORY: (
        JobSpec(
            label="Cleaning AI Application History",
            candidates=(
                "~/.config/LM Studio/logs",
                "~/.config/LM Studio/Crashpad",
                "~/.config/StabilityMatrix/Logs",
                "~/.config/StabilityMatrix/Temp",
            ),
        ),
    ),
    Category.SYSTEM_LOGS: (
        # Rotated backups are removed, active logs are emptied in place.
        JobSpec(
            label="Cleaning System & Security Logs",
            purge=(
                ("/var/log", "*.gz"),
                ("/var/log", "*.log.*"),
                ("/var/log", "*.old"),
            ),
            truncate=(
                "/var/log/alternatives.log",
                "/var/log/auth.log",
                "/var/log/boot.log",
                "/var/log/btmp",
                "/var/log/dmesg",
                "/var/log/dpkg.log",
                "/var/log/faillog",
                "/var/log/kern.log",
                "/var/log/lastlog",
                "/var/log/ufw.log",
                "/var/log/wtmp",
                "/var/log/Xorg.0.log",
                "/var/log/apt/history.log",
            ),
            keep_going=True,
        ),
    ),
}

DESCRIPTIONS: dict[Category, tuple[str, str]] = {
    Category.BROWSERS: ("Browsers", "Browser History, Bookmarks, and Caches."),
    Category.OS_HISTORY: ("OS & File History", "Trash, Recent Files, Thumbnails, Terminal History."),
    Category.APP_HISTORY: (
        "Application History",
        "File Access Logs (GVFS), Media Player History, VSCodium, IRC.",
    ),
    Category.APP_CACHES: ("App Caches & Logs", "Electron App crash reports (Etcher, etc.), NordVPN Logs."),
    Category.AI_HISTORY: ("AI Application History", "Logs & crash reports from AI apps."),
    Category.SYSTEM_LOGS: (
        "System & Security Logs (Requires Admin)",
        "Clears system-wide logs like logins, errors, and firewall.",
    ),
}
