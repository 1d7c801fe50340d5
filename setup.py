from setuptools import setup, find_packages

setup(
    name="bitcanvas",
    version="0.1.0",
    description="Bit-packed monochrome pixel canvas with base64 encoding",
    author="Garrett Johnson",
    packages=find_packages(include=["bitcanvas", "bitcanvas.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.23",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["bitcanvas=bitcanvas.cli:main"],
    },
)
