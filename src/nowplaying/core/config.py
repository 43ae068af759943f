"""
Configuration management for Now Playing
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# bcrypt hash of the stock admin password; override with ADMIN_PASSWORD
DEFAULT_ADMIN_PASSWORD_HASH = (
    "$2a$10$btuYOHaeDMra.cF9xj3X9ePue8lT0R9G7wqNKDJQ3U8IELF9zOgPe"
)
DEFAULT_JWT_SECRET = "your-secret-key-change-this"


@dataclass
class StorageConfig:
    """Configuration for the song queue file."""

    songs_file: Optional[str] = None  # default: <data dir>/songs.md
    cache_ttl_seconds: float = 5.0

    def resolve_songs_file(self) -> Path:
        """Path of the queue document, falling back to the data directory."""
        if self.songs_file:
            return Path(self.songs_file).expanduser()
        return get_data_dir() / "songs.md"


@dataclass
class AuthConfig:
    """Configuration for the admin credential."""

    jwt_secret: str = DEFAULT_JWT_SECRET
    admin_username: str = "admin"
    admin_password_hash: str = DEFAULT_ADMIN_PASSWORD_HASH
    token_lifetime_hours: int = 24
    algorithm: str = "HS256"

    def validate(self) -> None:
        """Validate auth configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.token_lifetime_hours <= 0:
            raise ValueError(
                f"token_lifetime_hours must be positive, got {self.token_lifetime_hours}"
            )
        if not self.jwt_secret:
            raise ValueError("jwt_secret must not be empty")


@dataclass
class DisplayConfig:
    """Defaults used by the public display and new songs."""

    default_image: str = "/origin.jpg"
    placeholder_title: str = "Untitled Song"
    # Shown when nothing is playing
    fallback_title: str = "WhereDoWeCameFrom"
    fallback_artist: str = "ANA"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/now-playing/now-playing.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = False  # Also output to console (for debugging)


@dataclass
class WebConfig:
    """Configuration for the FastAPI backend."""

    host: str = "0.0.0.0"
    port: int = 8000
    auto_reload: bool = False


@dataclass
class Config:
    """Main configuration object."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "now-playing"
    return Path.home() / ".config" / "now-playing"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    try:
        current = Path(__file__).resolve().parent
        for parent in [current] + list(current.parents):
            if (parent / "pyproject.toml").exists():
                config_path = parent / "config.toml"
                if config_path.exists():
                    return config_path
                # Found project root but no config.toml there
                return None
    except OSError:
        pass
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/now-playing (or ~/.config/now-playing)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "now-playing"
    return Path.home() / ".local" / "share" / "now-playing"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Now Playing Configuration

[storage]
# Markdown file holding the song queue (default: ~/.local/share/now-playing/songs.md)
# songs_file = "data/songs.md"

# Seconds a loaded queue is served from memory before re-reading the file
cache_ttl_seconds = 5

[auth]
# Secret used to sign admin tokens (override with JWT_SECRET)
# jwt_secret = "change-me"

# Admin login (override with ADMIN_USERNAME / ADMIN_PASSWORD)
admin_username = "admin"
# admin_password_hash = "$2b$12$..."  # generate with: now-playing hash-password

# Token lifetime in hours
token_lifetime_hours = 24

[display]
# Artwork used when a song has none
default_image = "/origin.jpg"

# Title used when a song is added without one
placeholder_title = "Untitled Song"

# Shown on the public display when nothing is playing
fallback_title = "WhereDoWeCameFrom"
fallback_artist = "ANA"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/now-playing/now-playing.log)
# log_file = "/path/to/custom/now-playing.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to console (useful for debugging)
console_output = false

[web]
host = "0.0.0.0"
port = 8000
auto_reload = false
""".strip()


def _apply_env_overrides(config: Config) -> None:
    """Environment variables win over TOML values."""
    jwt_secret = os.environ.get("JWT_SECRET")
    admin_username = os.environ.get("ADMIN_USERNAME")
    admin_password = os.environ.get("ADMIN_PASSWORD")

    if jwt_secret:
        config.auth.jwt_secret = jwt_secret
    if admin_username:
        config.auth.admin_username = admin_username
    if admin_password:
        config.auth.admin_password_hash = admin_password


def parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML, keeping defaults for missing keys."""
    config = Config()

    if "storage" in toml_data:
        storage_data = toml_data["storage"]
        config.storage = StorageConfig(
            songs_file=storage_data.get("songs_file"),
            cache_ttl_seconds=float(
                storage_data.get("cache_ttl_seconds", config.storage.cache_ttl_seconds)
            ),
        )

    if "auth" in toml_data:
        auth_data = toml_data["auth"]
        config.auth = AuthConfig(
            jwt_secret=auth_data.get("jwt_secret", config.auth.jwt_secret),
            admin_username=auth_data.get("admin_username", config.auth.admin_username),
            admin_password_hash=auth_data.get(
                "admin_password_hash", config.auth.admin_password_hash
            ),
            token_lifetime_hours=auth_data.get(
                "token_lifetime_hours", config.auth.token_lifetime_hours
            ),
        )
        try:
            config.auth.validate()
        except ValueError as e:
            print(f"Warning: Invalid auth configuration: {e}")
            print("Using default auth configuration.")
            config.auth = AuthConfig()

    if "display" in toml_data:
        display_data = toml_data["display"]
        config.display = DisplayConfig(
            default_image=display_data.get(
                "default_image", config.display.default_image
            ),
            placeholder_title=display_data.get(
                "placeholder_title", config.display.placeholder_title
            ),
            fallback_title=display_data.get(
                "fallback_title", config.display.fallback_title
            ),
            fallback_artist=display_data.get(
                "fallback_artist", config.display.fallback_artist
            ),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level),
            log_file=log_file,
            max_file_size_mb=logging_data.get(
                "max_file_size_mb", config.logging.max_file_size_mb
            ),
            backup_count=logging_data.get("backup_count", config.logging.backup_count),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    if "web" in toml_data:
        web_data = toml_data["web"]
        config.web = WebConfig(
            host=web_data.get("host", config.web.host),
            port=web_data.get("port", config.web.port),
            auto_reload=web_data.get("auto_reload", config.web.auto_reload),
        )

    return config


def load_config() -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - JWT_SECRET
    - ADMIN_USERNAME
    - ADMIN_PASSWORD (bcrypt hash)
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        config = Config()
        _apply_env_overrides(config)
        return config

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
        config = parse_config(toml_data)
    except Exception as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        config = Config()

    _apply_env_overrides(config)
    return config


def ensure_directories() -> None:
    """Ensure all necessary directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
