# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import os
import pathlib

import pytest

from rsasample import errors
from rsasample.options import ActionRequest
from rsasample.options import OptionValidator
from rsasample.runtime import Mode
from rsasample.runtime import STDOUT


@pytest.fixture
def validator(runtime):
    return OptionValidator(runtime)


@pytest.fixture
def paths(key_files, sample):
    return str(key_files[0]), str(sample)


def test_no_action(validator):
    with pytest.raises(errors.NoActionSpecified, match="^Please define action: encode, decode, generate$"):
        validator.parse([])
    with pytest.raises(errors.NoActionSpecified):
        validator.parse(["--background", "--verbose", "-o", "out.bin"])


@pytest.mark.parametrize("args", [["--unknown"], ["-k"], ["--encrypt"], ["stray"], ["-g", "-x"]])
def test_parse_error(validator, args):
    with pytest.raises(errors.ParseError):
        validator.parse(args)


@pytest.mark.parametrize("args", [["-e", "a", "-d", "b"], ["-g", "-h"], ["-g", "-e", "a"]])
def test_conflicting_actions(validator, args):
    with pytest.raises(errors.ConflictingActions):
        validator.parse(args)


def test_help(validator):
    assert validator.parse(["-h"]) == ActionRequest(Mode.HELP)
    assert validator.parse(["--help", "-b"]).mode is Mode.HELP


@pytest.mark.parametrize("flag", ["-e", "--encrypt", "-d", "--decrypt"])
def test_missing_key(validator, sample, flag):
    with pytest.raises(errors.MissingKey, match="^Please specify the key to use$"):
        validator.parse([flag, str(sample)])


def test_invalid_key_or_input(validator, paths, tmp_path):
    key, source = paths
    missing = str(tmp_path / "missing")
    with pytest.raises(errors.InvalidKeyOrInput, match="Please specify valid key and input"):
        validator.parse(["-e", source, "-k", missing])
    with pytest.raises(errors.InvalidKeyOrInput):
        validator.parse(["-d", missing, "-k", key])


def test_encrypt_defaults(validator, paths):
    key, source = paths
    request = validator.parse(["--encrypt", source, "--key", key])
    assert request == ActionRequest(Mode.ENCRYPT, pathlib.Path(key), pathlib.Path(source))
    assert request.output == STDOUT
    assert not request.background
    assert not request.verbose


def test_decrypt_all_flags(validator, paths, tmp_path):
    key, source = paths
    out = tmp_path / "out.bin"
    request = validator.parse(["-d", source, "-k", key, "-o", str(out), "-b", "-v"])
    assert request.mode is Mode.DECRYPT
    assert request.output == out
    assert request.background
    assert request.verbose


def test_explicit_stdout(validator, paths):
    key, source = paths
    assert validator.parse(["-e", source, "-k", key, "-o", "stdout"]).output == STDOUT


def test_output_existing_file(validator, paths, tmp_path):
    key, source = paths
    out = tmp_path / "existing.bin"
    out.write_bytes(b"old")
    assert validator.parse(["-e", source, "-k", key, "-o", str(out)]).output == out


def test_output_missing_parent(validator, paths, tmp_path):
    key, source = paths
    out = tmp_path / "nowhere" / "out.bin"
    with pytest.raises(errors.OutputNotWritable, match="Please make sure output path is writable"):
        validator.parse(["-e", source, "-k", key, "-o", str(out)])


def test_output_is_directory(validator, paths, tmp_path):
    key, source = paths
    with pytest.raises(errors.OutputNotWritable):
        validator.parse(["-e", source, "-k", key, "-o", str(tmp_path)])


def test_output_not_writable(mocker, validator, paths, tmp_path):
    key, source = paths
    out = tmp_path / "existing.bin"
    out.write_bytes(b"old")
    mocker.patch("rsasample.options.os.access", side_effect=lambda path, mode: mode != os.W_OK)
    with pytest.raises(errors.OutputNotWritable):
        validator.parse(["-e", source, "-k", key, "-o", str(out)])
    with pytest.raises(errors.OutputNotWritable):
        validator.parse(["-e", source, "-k", key, "-o", str(tmp_path / "new.bin")])


def test_generate(validator):
    request = validator.parse(["--generate"])
    assert request == ActionRequest(Mode.GENERATE)


def test_generate_not_writable(mocker, validator):
    mocker.patch("rsasample.options.os.access", return_value=False)
    with pytest.raises(errors.WorkingDirectoryNotWritable,
                       match="Current directory is not writable - cannot generate the keys"):
        validator.parse(["-g"])


def test_request_requires_paths():
    with pytest.raises(ValueError):
        ActionRequest(Mode.ENCRYPT, key=pathlib.Path("private.key"))
    with pytest.raises(ValueError):
        ActionRequest(Mode.DECRYPT, source=pathlib.Path("sample.txt"))


def test_usage(validator):
    usage = validator.usage()
    assert usage.startswith("usage: rsasample")
    for flag in ("--key", "--encrypt", "--decrypt", "--output", "--help", "--generate", "--background", "--verbose"):
        assert flag in usage


def test_version(validator, runtime, capsys):
    with pytest.raises(SystemExit) as exc:
        validator.parse(["--version"])
    assert exc.value.code == 0
    assert runtime.stream.getvalue().startswith("rsasample ")
    assert capsys.readouterr().out == ""
