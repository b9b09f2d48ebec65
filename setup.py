"""todo-e2e - End-to-end browser tests for the todo app."""
from setuptools import setup, find_packages

setup(
    name="todo-e2e",
    version="1.0.0",
    description="Playwright end-to-end test suite and login fixture for the todo app",
    packages=find_packages(include=["todo_e2e", "todo_e2e.*"]),
    include_package_data=True,
    package_data={
        "todo_e2e": ["templates/*"],
    },
    install_requires=[
        "click>=8.1.0",
        "jinja2>=3.1.0",
        "rich>=13.0.0",
        "questionary>=2.0.0",
        "python-dotenv>=1.0.0",
        "playwright>=1.40.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-playwright>=0.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "todo-e2e=todo_e2e.cli:main",
        ],
    },
    python_requires=">=3.10",
)
