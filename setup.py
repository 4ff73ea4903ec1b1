"""
Setup script for formula-hub.

Math Formula Hub is a terminal companion for school mathematics. A student
picks a class (7-12) and a topic, and gets a structured, AI-generated
explanation of the formula:

1. Intuition - what the formula is really saying
2. Practice - a solved example, a trap question, the classic mistake
3. Connections - a memory trick and related formulas to explore next

The 'formula-hub' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="formula-hub",
    version="1.0.0",
    description="Grade-aware math formula explanations powered by Gemini",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Math Formula Hub",
    packages=find_packages(include=["formula_hub", "formula_hub.*"]),
    py_modules=["config"],
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.12.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.6.0",
        "pydantic-settings>=2.2.0",
        # AI
        "google-genai>=1.20.0",
        # HTTP
        "httpx>=0.25.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "formula-hub=formula_hub.cli.hub_cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="math education formulas gemini cli",
)
