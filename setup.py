# setup.py
from setuptools import setup, find_packages

setup(
    name="mergemaster",
    version="1.0.2",
    description="Merge selected files and folders into one document with a directory tree",
    packages=find_packages("src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "customtkinter",  # GUI (interface/gui)
        "pathspec",       # .gitignore matching
        "pyperclip",      # Clipboard delivery
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'mergemaster=mergemaster.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
