from srcmapper.utils.gitignore import GitignoreSpec
from srcmapper.utils.paths import is_url, relative_to, resolve, unix_style_path

__all__ = ["GitignoreSpec", "is_url", "relative_to", "resolve", "unix_style_path"]
