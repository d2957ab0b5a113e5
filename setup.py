from setuptools import find_packages, setup

with open("requirements.txt", "r", encoding="utf-8") as f:
    requires = []
    for line in f:
        req = line.split("#", 1)[0].strip()
        if req and not req.startswith("--"):
            requires.append(req)

setup(
    name="covid_db",
    version="0.2.0",
    packages=find_packages(exclude=["tests"]),
    install_requires=requires,
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["covid-db=covid_db.main:main"]},
)
