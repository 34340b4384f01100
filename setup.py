import setuptools

setuptools.setup(
	name='uiuadoc',
	version='0.1.0',
	packages=[
		'uiuadoc',
		'uiuadoc.extraction',
		'uiuadoc.markdown',
		'uiuadoc.support',
	],
	description='Extract a structured documentation model from Uiua source libraries',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	python_requires='>=3.9',
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Documentation",
		"Development Status :: 3 - Alpha",
    ],
)
