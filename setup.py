from setuptools import setup, find_packages

# Read the contents of your README file
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Read the contents of your requirements.txt file
with open("requirements.txt", "r", encoding="utf-8") as fh:
    install_requires = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="BusterX",
    version="0.1.0",
    description="Concurrent directory, fuzzing, virtual host and subdomain discovery tool.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["busterx"],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Security",
        "Topic :: Internet :: WWW/HTTP",
        "Intended Audience :: Information Technology",
        "Intended Audience :: System Administrators",
    ],
    python_requires='>=3.10', # `X | None` annotations
    install_requires=install_requires,
    extras_require={
        'test': ['pytest>=7.0', 'pytest-asyncio>=0.21'],
    },
    entry_points={
        'console_scripts': [
            'busterx=busterx:main', # This makes 'busterx' command runnable from terminal
        ],
    },
)
