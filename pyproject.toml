[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sotaller"
version = "0.1.0"
description = "Operating-systems workshop exercises: threads, semaphores, named pipes, signals, file I/O and the banker's algorithm"
requires-python = ">=3.10"
keywords = [
    "operating-systems",
    "education",
    "semaphores",
    "threads",
    "named-pipes",
    "signals",
    "banker-algorithm",
    "deadlock-avoidance",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Natural Language :: Spanish",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sotaller-v3 = "sotaller.v3:main"
sotaller-garden = "sotaller.garden_sim:main"
sotaller-garden-limited = "sotaller.garden_sim:main_limited"
sotaller-smokers = "sotaller.smokers:main"
sotaller-pipe-create = "sotaller.named_pipes:main_create"
sotaller-pipe-remove = "sotaller.named_pipes:main_remove"
sotaller-pipe-server = "sotaller.pipe_server:server_main"
sotaller-pipe-client = "sotaller.pipe_server:client_main"
sotaller-echo-service = "sotaller.echo_service:service_main"
sotaller-echo-client = "sotaller.echo_service:client_main"
sotaller-service2 = "sotaller.signal_services:service2_main"
sotaller-systemd-service = "sotaller.signal_services:systemd_service_main"
sotaller-capture-signal = "sotaller.signal_services:capture_main"
sotaller-show-file = "sotaller.file_io:main_show"
sotaller-upper = "sotaller.file_io:main_upper"
sotaller-threads = "sotaller.threads:main"

[tool.hatch.build.targets.wheel]
packages = ["sotaller"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
