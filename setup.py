from setuptools import setup, find_packages

setup(
    name="gpb",
    version="0.1.0",
    description="Builds a project, locates its binary and copies it to a remote host",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords=["gprbuild", "scp"],
    python_requires=">=3.11",
    packages=find_packages(include=["gpb", "gpb.*"]),
    install_requires=[
        "returns",
        "toml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "gpb = gpb.main:main",
        ]
    },
)
