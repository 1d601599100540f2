"""Constants and fallback tables for cjkalign."""

APP_NAME = "cjkalign"

# Supported font sizes, smallest first. Index-aligned with FALLBACK_FONT_SCALES.
FONT_SIZE_STEPS: tuple[float, ...] = (9, 10.5, 11.5, 12.5, 14, 16, 18, 20, 22)

# CJK scale applied when the English size is FONT_SIZE_STEPS[i]
FALLBACK_FONT_SCALES: tuple[float, ...] = (1.05, 1.05, 1.10, 1.10, 1.10, 1.05, 1.00, 1.05, 1.05)

DEFAULT_FONT_SIZE = 12.5
FALLBACK_SCALE_INDEX = 1  # Used when a size is not in FONT_SIZE_STEPS
NEUTRAL_SCALE = 1.0

# Scale tuning
SCALE_NUDGE_STEP = 0.01
SCALE_PRECISION = 2
MIN_SCALE = 0.01

# Sizes starting with this marker are passed to the renderer verbatim ("Monaco:pixelsize=14")
SIZE_DIRECTIVE_MARKER = ":pixelsize="

# Font roles, by position in a profile's fontnames list
ROLE_NAMES = ("english", "chinese", "symbol", "extb")
REQUIRED_ROLES = ("english", "chinese")

FALLBACK_ENGLISH_FONTS = (
    "Monaco",
    "Consolas",
    "DejaVu Sans Mono",
    "Droid Sans Mono",
    "PragmataPro",
    "Courier",
    "Courier New",
    "Ubuntu Mono",
    "Liberation Mono",
    "Inconsolata",
    "Source Code Pro",
    "Lucida Console",
    "Andale Mono",
    "Bitstream Vera Sans Mono",
    "PT Mono",
    "Fira Mono",
    "Fira Code",
    "Hack",
    "Anonymous Pro",
    "Noto Sans Mono",
)

FALLBACK_CHINESE_FONTS = (
    "黑体",
    "微软雅黑",
    "宋体",
    "新宋体",
    "楷体",
    "WenQuanYi Micro Hei Mono",
    "WenQuanYi Zen Hei Mono",
    "Noto Sans Mono CJK SC",
    "Noto Sans CJK SC",
    "Source Han Sans SC",
    "Sarasa Mono SC",
    "PingFang SC",
    "Hiragino Sans GB",
    "STHeiti",
    "SimHei",
    "SimSun",
    "Microsoft YaHei",
)

FALLBACK_SYMBOL_FONTS = (
    "Segoe UI Symbol",
    "Symbola",
    "Noto Sans Symbols",
    "Noto Sans Symbols2",
    "Symbol",
)

FALLBACK_EXTB_FONTS = (
    "SimSun-ExtB",
    "MingLiU-ExtB",
    "PMingLiU-ExtB",
    "HanaMinB",
)

FALLBACK_FONT_NAMES: tuple[tuple[str, ...], ...] = (
    FALLBACK_ENGLISH_FONTS,
    FALLBACK_CHINESE_FONTS,
    FALLBACK_SYMBOL_FONTS,
    FALLBACK_EXTB_FONTS,
)

# Profile registry
DEFAULT_PROFILES = ("program", "org-mode", "read-book")

# On-disk layout under the configuration directory
PROFILES_SUBDIR = "profiles"
PROFILE_FILE_EXT = ".json"
SETTINGS_FILENAME = "settings.json"

# Installed font discovery
FONT_EXTENSIONS = {".ttf", ".otf", ".ttc", ".otc"}
COLLECTION_EXTENSIONS = {".ttc", ".otc"}
# nameIDs: 1 = family, 4 = full name, 16 = typographic family
FAMILY_NAME_IDS = (1, 4, 16)
