"""setuptools setup for phasetimer.

Install for development:
    pip install -e ".[test]"
    pytest
"""

from setuptools import setup, find_packages

setup(
    name="phasetimer",
    version="0.1.0",
    description="Pausable elapsed-time tracking with subtimers",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.10",
    install_requires=["PyQt6"],
    extras_require={"test": ["pytest"]},
)
