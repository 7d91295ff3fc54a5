"""Host machine identifier lookup, the default seed when none is given.

Linux: /etc/machine-id (32 hex, no hyphens).
macOS: IOPlatformUUID reported by ioreg.
Windows: MachineGuid under HKLM\\SOFTWARE\\Microsoft\\Cryptography.
"""

from __future__ import annotations

import re
import subprocess
import sys
from pathlib import Path

_LINUX_PATHS = (Path("/etc/machine-id"), Path("/var/lib/dbus/machine-id"))
_IOREG_UUID = re.compile(r'"IOPlatformUUID"\s*=\s*"([^"]+)"')


class MachineIdError(RuntimeError):
    """The host identifier could not be read."""


def _linux_machine_id(paths: tuple[Path, ...] = _LINUX_PATHS) -> str | None:
    for path in paths:
        try:
            value = path.read_text(encoding="utf-8").strip()
        except OSError:
            continue
        if value:
            return value
    return None


def _macos_platform_uuid() -> str | None:
    try:
        out = subprocess.run(
            ["ioreg", "-rd1", "-c", "IOPlatformExpertDevice"],
            capture_output=True,
            text=True,
            check=True,
            timeout=5,
        ).stdout
    except (OSError, subprocess.SubprocessError):
        return None
    match = _IOREG_UUID.search(out)
    return match.group(1) if match else None


def _windows_machine_guid() -> str | None:
    import winreg

    try:
        with winreg.OpenKey(
            winreg.HKEY_LOCAL_MACHINE,
            r"SOFTWARE\Microsoft\Cryptography",
            0,
            winreg.KEY_READ | winreg.KEY_WOW64_64KEY,
        ) as key:
            value, _ = winreg.QueryValueEx(key, "MachineGuid")
    except OSError:
        return None
    return str(value).strip() or None


def get_machine_uuid(platform: str | None = None) -> str:
    """Return this host's identifier. Raises MachineIdError if unavailable."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        value = _windows_machine_guid()
    elif platform == "darwin":
        value = _macos_platform_uuid()
    else:
        value = _linux_machine_id()
    if not value:
        raise MachineIdError(f"Could not determine machine UUID on {platform}")
    return value
