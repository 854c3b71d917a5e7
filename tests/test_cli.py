"""
test_cli.py — Command Line Tests
================================

Verifies:
  - Argument parsing, defaults and option validation
  - Exit codes for bad setups, failed patches and success
  - Face-index preview is written when requested
"""

import logging
import os

import pytest
import jax
jax.config.update("jax_enable_x64", True)
import numpy as np

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cube2oct import io
from cube2oct.cli import build_parser, main, options_from_args
from cube2oct.config import Cube2OctError, DEFAULT_CHUNK_ROWS
from cube2oct.image import faces_to_strip
from cube2oct.logging_config import setup_logging
from cube2oct.preview import face_index_map


@pytest.fixture
def fake_io(monkeypatch, colored_faces):
    written = {}
    strip = np.asarray(faces_to_strip(colored_faces(4)))
    monkeypatch.setattr(io, 'read_rgb', lambda path: strip)
    monkeypatch.setattr(io, 'write_rgb', lambda path, img: written.__setitem__(path, img))
    return written


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(['-i', 'a.exr', '-o', 'b.exr'])
        options = options_from_args(args)
        assert options.resample == 'mitchell'
        assert options.transform is None
        assert options.mirror_faces
        assert options.chunk_rows == DEFAULT_CHUNK_ROWS
        assert not (options.encode or options.mono or options.to_cube)

    def test_resample_case_insensitive(self):
        args = build_parser().parse_args(['-i', 'a', '-o', 'b', '-r', 'GAUSSIAN'])
        assert options_from_args(args).resample == 'gaussian'

    def test_unknown_resample(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['-i', 'a', '-o', 'b', '-r', 'lanczos'])

    def test_transform_16_values(self):
        values = [str(v) for v in range(16)]
        args = build_parser().parse_args(['-i', 'a', '-o', 'b', '-t'] + values)
        assert options_from_args(args).transform == tuple(float(v) for v in range(16))

    def test_encode_and_mono_clash(self):
        args = build_parser().parse_args(['-i', 'a', '-o', 'b', '-e', '-m'])
        with pytest.raises(Cube2OctError):
            options_from_args(args)

    def test_to_cube_needs_point_filter(self):
        args = build_parser().parse_args(['-i', 'a', '-o', 'b', '--to-cube'])
        with pytest.raises(Cube2OctError, match="nearest and bilinear"):
            options_from_args(args)


class TestMain:

    def test_missing_input(self, tmp_path):
        assert main(['-i', str(tmp_path / 'none.exr'), '-o', 'out.exr']) == 1

    def test_success(self, tmp_path, fake_io):
        src = tmp_path / 'cube.exr'
        src.write_bytes(b'')
        dst = str(tmp_path / 'oct.exr')
        assert main(['-i', str(src), '-o', dst, '-r', 'nearest']) == 0
        assert fake_io[dst].shape == (4, 4, 3)

    def test_preview(self, tmp_path, fake_io):
        src = tmp_path / 'cube.exr'
        src.write_bytes(b'')
        png = tmp_path / 'faces.png'
        rc = main(['-i', str(src), '-o', str(tmp_path / 'oct.exr'),
                   '-r', 'bilinear', '--preview', str(png)])
        assert rc == 0
        assert png.exists() and png.stat().st_size > 0

    def test_failed_patch_exit_code(self, tmp_path, monkeypatch):
        src = tmp_path / 'cube.exr'
        src.write_bytes(b'')

        def broken(path):
            raise OSError("unreadable")
        monkeypatch.setattr(io, 'read_rgb', broken)
        assert main(['-i', str(src), '-o', str(tmp_path / 'oct.exr')]) == 1

    def test_log_file(self, tmp_path, fake_io):
        src = tmp_path / 'cube.exr'
        src.write_bytes(b'')
        log = tmp_path / 'run.log'
        main(['-i', str(src), '-o', str(tmp_path / 'o.exr'), '-r', 'nearest',
              '--log-file', str(log)])
        logging.getLogger('cube2oct').handlers[-1].flush()
        assert 'writing file' in log.read_text(encoding='utf-8')


class TestLoggingAndPreview:

    def test_setup_idempotent(self):
        setup_logging(logging.INFO)
        setup_logging(logging.DEBUG)
        logger = logging.getLogger('cube2oct')
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_file_copy(self, tmp_path):
        log = tmp_path / 'setup.log'
        logger = setup_logging(logging.DEBUG, str(log))
        assert logger is logging.getLogger('cube2oct')
        assert len(logger.handlers) == 2
        logger.handlers[-1].flush()
        assert 'logging at DEBUG' in log.read_text(encoding='utf-8')
        # Closes the file handler again
        setup_logging(logging.INFO)
        assert len(logger.handlers) == 1

    def test_face_index_map(self):
        faces = face_index_map(4)
        assert faces.shape == (4, 4)
        assert set(np.unique(faces)) == set(range(6))
        assert faces[1, 1] == 4
