r"""Specify stormclimo version."""

def get_version():
    r"""Get the installed version of stormclimo, or a placeholder when running from a source checkout."""
    
    from importlib.metadata import version, PackageNotFoundError
    try:
        return version(__package__)
    except PackageNotFoundError:
        return '0+unknown'
