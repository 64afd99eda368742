"""
Check the Visual Studio Marketplace for newer versions of an extension.
"""

__version__ = "0.1.0"
