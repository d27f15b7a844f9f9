from __future__ import annotations

import getpass
import platform

# Architecture and OS names as reported by Node's `os.arch()` / `os.type()`,
# which is what skill instructions expect.
_ARCH_NAMES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "armv7l": "arm",
    "armv6l": "arm",
    "ppc64le": "ppc64",
    "s390x": "s390x",
}


def _os_type() -> str:
    match platform.system():
        case "Windows":
            return "Windows_NT"
        case system:
            return system


def _os_arch() -> str:
    machine = platform.machine()
    return _ARCH_NAMES.get(machine.lower(), machine)


def collect_os_infos() -> dict[str, str]:
    return {
        "arch": _os_arch(),
        "type": _os_type(),
    }


def collect_username() -> str:
    return getpass.getuser()
