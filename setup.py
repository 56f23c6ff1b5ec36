from setuptools import setup, find_packages

setup(
    name="feedforge",
    version="1.0.0",
    description="Render one generic feed as RSS, Atom, OPML, JSON Feed or HTML",
    author="feedforge contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "python-dateutil>=2.8.0",
        "rich>=13.0.0",
        "pyyaml>=6.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "feedparser>=6.0.0",
            "beautifulsoup4>=4.12.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "feedforge=feedforge.cli:main",
        ],
    },
    python_requires=">=3.9",
)
