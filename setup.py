from setuptools import setup, find_packages

setup(
    name='kyma_vcs_decoder',
    version='0.1.0',
    description='Decoder for optimized Kyma /vcs OSC blob notifications',
    packages=find_packages(include=['kyma_vcs_decoder', 'kyma_vcs_decoder.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
