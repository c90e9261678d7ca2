import os

import setuptools

setuptools.setup(
    name="colloquy",
    version="0.1.0",
    author="Gustavo Ramos Rehermann",
    author_email="rehermann6046@gmail.com",
    license="COIL",
    description="Ordered, in-process message delivery: subscription lists and mediator channels.",
    long_description=open(os.path.join(os.path.dirname(__file__), "description.md")).read(),
    long_description_content_type="text/markdown",
    keywords="mediator observer pubsub channel events trio",
    install_requires=open(os.path.join(os.path.dirname(__file__), "requirements.txt"))
    .read()
    .strip()
    .split("\n"),
    extras_require={"test": ["pytest>=7"]},
    python_requires=">=3.9",
    packages=["colloquy", "colloquy.mutators"],
    classifiers=[
        "Framework :: Trio",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Libraries :: Application Frameworks",
        "Topic :: Communications",
    ],
)
