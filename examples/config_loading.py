"""config_loading.py"""

from cmdtree.config import loader
from cmdtree.defaults import DefaultFlagRegistry

root = loader("cmdtree.yaml", default_flags=DefaultFlagRegistry.with_help())

if __name__ == "__main__":
    root.execute()
