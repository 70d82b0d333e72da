"""tmuxsnap lives at <https://github.com/tmuxsnap/tmuxsnap>.

tmuxsnap
--------

Save the layout of a tmux session to YAML and rebuild it later.

"""
from setuptools import find_packages, setup

about = {}
with open("src/tmuxsnap/__about__.py") as fp:
    exec(fp.read(), about)

with open("requirements/base.txt") as f:
    install_reqs = [line for line in f.read().split("\n") if line]

with open("requirements/test.txt") as f:
    tests_reqs = [line for line in f.read().split("\n") if line]

readme = open("README.md", encoding="utf-8").read()


setup(
    name=about["__title__"],
    version=about["__version__"],
    url=about["__github__"],
    download_url=about["__pypi__"],
    project_urls={
        "Documentation": about["__docs__"],
        "Code": about["__github__"],
        "Issue tracker": about["__tracker__"],
    },
    license=about["__license__"],
    author=about["__author__"],
    author_email=about["__email__"],
    description=about["__description__"],
    long_description=readme,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src"),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=install_reqs,
    extras_require={"test": tests_reqs},
    entry_points={
        "console_scripts": ["tmuxsnap = tmuxsnap.cli:main"],
    },
    zip_safe=False,
    keywords=about["__title__"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX",
        "Operating System :: MacOS :: MacOS X",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Utilities",
        "Topic :: System :: Shells",
    ],
)
