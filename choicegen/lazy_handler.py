import os
import glob
import logging
import tempfile
from logging.handlers import RotatingFileHandler

logger = logging.getLogger(__name__)


class LazyRotatingFileHandler(RotatingFileHandler):
    """
    RotatingFileHandler writing `basename` into a private temp directory.

    An existing directory named <tempdir>/<tmpdir_prefix>* is reused when it
    belongs to the current user, is mode 0700 and holds no symlinks;
    otherwise a fresh one is made with mkdtemp. The file itself is only
    opened when the first record is emitted.
    """

    def __init__(self, tmpdir_prefix='', basename=None, *args, **kwargs):

        if not basename:
            raise ValueError("basename is required")

        self.base_dir = self._create_temp_dir(tmpdir_prefix)
        kwargs['filename'] = os.path.join(self.base_dir, basename)
        kwargs.setdefault('delay', True)
        super().__init__(*args, **kwargs)

    @staticmethod
    def _tmpdir_usable(path):

        try:
            st = os.stat(path)
        except OSError:
            return False

        if not os.path.isdir(path):
            return False
        if st.st_uid != os.getuid() or (st.st_mode & 0o777) != 0o700:
            return False
        for item in os.listdir(path):
            if os.path.islink(os.path.join(path, item)):
                return False

        return True

    @classmethod
    def _create_temp_dir(cls, tmpdir_prefix):

        if tmpdir_prefix:
            pattern = os.path.join(tempfile.gettempdir(), f"{glob.escape(tmpdir_prefix)}*")
            for dir_ in sorted(glob.glob(pattern)):
                if cls._tmpdir_usable(dir_):
                    logger.debug(f"reusing log directory {dir_}")
                    return dir_

        # mkdtemp creates the directory 0700
        base_dir = tempfile.mkdtemp(prefix=tmpdir_prefix or None)
        logger.debug(f"created log directory {base_dir}")
        return base_dir
