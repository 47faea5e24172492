from setuptools import find_packages, setup


with open('README.md') as file:
    long_description = file.read()


setup(
    name='yinpitch',
    description='Streaming YIN pitch estimation',
    version='0.0.1',
    author='yinpitch contributors',
    extras_require={
        'test': [
            'librosa',     # 0.10.1
            'pytest'       # 7.4.3
        ]
    },
    install_requires=[
        'numpy',           # 1.23.4
        'soundfile',       # 0.12.1
        'torch',           # 1.12.1
        'torchaudio<2.9',  # 2.8.0
        'torchutil',       # 0.0.7
        'tqdm',            # 4.64.1
        'yapecs'           # 0.0.6
    ],
    packages=find_packages(exclude=['test', 'test.*']),
    long_description=long_description,
    long_description_content_type='text/markdown',
    keywords=['audio', 'frequency', 'music', 'pitch', 'real-time', 'yin'],
    classifiers=['License :: OSI Approved :: MIT License'],
    license='MIT')
