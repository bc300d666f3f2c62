from enum import Enum


class Mode(str, Enum):
    """
    Enumeration modes supported by BusterX. A mode is picked once per run and
    decides how the target is turned into requests.
    """
    DIR = "dir"
    FUZZ = "fuzz"
    VHOST = "vhost"
    DNS = "dns"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def accepts_extensions(self) -> bool:
        """Extension lists only make sense when the word ends up in the URL path."""
        return self in (Mode.DIR, Mode.FUZZ)

    def __str__(self) -> str:
        return self.label


_LABELS = {
    Mode.DIR: "Dir (Directory)",
    Mode.FUZZ: "Fuzz (Fuzzing)",
    Mode.VHOST: "VHost (Virtual Host)",
    Mode.DNS: "DNS (Subdomains)",
}
