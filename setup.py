from setuptools import setup

import os.path as osp

versionfile = osp.join(osp.dirname(osp.abspath(__file__)), "boltzmann",
                       "version.py")
with open(versionfile) as f:
    code = compile(f.read(), versionfile, 'exec')
    exec(code, globals(), locals())

setup(
        name="boltzmann",
        version=".".join(map(str, __version__)),  # noqa: F821
        description="Restricted Boltzmann machines trained via contrastive "
                    "divergence",
        packages=["boltzmann", "boltzmann.config"],
        python_requires=">=3.7",
        install_requires=[
            "numpy",
            "scipy",
            "matplotlib",
        ],
        extras_require={
            "test": ["pytest"],
        },
        zip_safe=True,
    )
