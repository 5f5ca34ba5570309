from setuptools import setup, find_packages
import os

# Read the README file for long description
readme_path = os.path.join(os.path.dirname(__file__), "README.md")
try:
    with open(readme_path, "r", encoding="utf-8") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = "Things 3 CLI - Command-line and RPC operation layer for Things 3"

# Read requirements from requirements.txt
requirements_path = os.path.join(os.path.dirname(__file__), "requirements.txt")
try:
    with open(requirements_path, "r", encoding="utf-8") as f:
        requirements = []
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                req = line.split("#")[0].strip()
                if req:
                    requirements.append(req)
except FileNotFoundError:
    requirements = [
        "typer[all]>=0.9.0",
        "rich>=13.5.2",
        "python-dotenv>=1.0.0",
        "dateparser>=1.1.0",
        "pydantic>=2.0.0",
    ]

setup(
    name="thingscli",
    version="1.0.0",
    author="Things CLI Team",
    description="Things 3 CLI - Manage to-dos, projects and lists in Things 3 via AppleScript",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["things_api", "commands", "utils"]),
    py_modules=["thingscli"],
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Office/Business :: Scheduling",
        "Topic :: Utilities",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Environment :: Console",
        "Natural Language :: English",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.1.3",
            "pytest-mock>=3.10.0",
            "black>=22.0.0",
            "flake8>=5.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "thingscli=thingscli:app",
        ],
    },
    keywords="things things3 productivity task-management cli apple macos applescript",
    zip_safe=False,
)
