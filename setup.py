from setuptools import setup

from passboltcommander import __version__

install_requires = [
    'certifi',
    'colorama',
    'prompt_toolkit',
    'requests',
    'tabulate',
    'urllib3',
]

if __name__ == '__main__':
    setup(
        name='passboltcommander',
        version=__version__,
        description='Passbolt Commander: command line folder sharing for Passbolt',
        packages=['passboltcommander', 'passboltcommander.commands'],
        python_requires='>=3.7',
        install_requires=install_requires,
        extras_require={
            'test': ['pytest'],
        },
        entry_points={
            'console_scripts': [
                'passbolt=passboltcommander.__main__:main',
            ],
        },
    )
