"""
Sport plugins. Each subpackage exposes ``create_plugin(manifest, settings)``
and is imported only when the registry first activates it.
"""
