import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr

from main import USAGE, main, parse_command
from utils.errors import UsageError


class TestParseCommand(unittest.TestCase):

    def test_split_file(self):
        run_config = parse_command('split', ['data.bin', '1 0', ' k'])
        self.assertEqual(run_config['agent'], 'SplitAgent')
        self.assertEqual(run_config['source'], 'data.bin')
        self.assertEqual(run_config['basename'], 'data.bin')
        self.assertEqual(run_config['size'], '10k')

    def test_split_stdin_takes_basename(self):
        run_config = parse_command('split', ['-', 'out.bin', '50m'])
        self.assertEqual(run_config['source'], '-')
        self.assertEqual(run_config['basename'], 'out.bin')
        self.assertEqual(run_config['size'], '50m')

    def test_join(self):
        self.assertEqual(parse_command('join', ['a/b.bin'])['outfile'], None)
        self.assertEqual(parse_command('join', ['a/b.bin', 'c.bin'])['outfile'], 'c.bin')

    def test_usage_errors(self):
        for command, args in [('merge', ['x']), ('split', []), ('split', ['-']), ('split', ['-', 'out.bin']),
                              ('split', ['data.bin']), ('join', []), ('join', ['a', 'b', 'c'])]:
            with self.subTest(command=command, args=args):
                with self.assertRaises(UsageError):
                    parse_command(command, args)


class TestMain(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.old_cwd = os.getcwd()
        os.chdir(self.temp_dir.name)
        os.makedirs('parts')
        self.data = os.urandom(10000)
        with open('parts/data.bin', 'wb') as f:
            f.write(self.data)

    def tearDown(self):
        os.chdir(self.old_cwd)
        self.temp_dir.cleanup()

    def run_main(self, argv, stdin=None):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stderr(stderr):
            code = main(argv, stdin=stdin, stdout=stdout)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_split_then_join(self):
        code, _, _ = self.run_main(['split', 'parts/data.bin', '4', 'k'])
        self.assertEqual(code, 0)
        self.assertEqual(sorted(os.listdir('parts')), ['data.bin', 'data.bin.0', 'data.bin.1', 'data.bin.2'])

        code, stdout, _ = self.run_main(['join', 'parts/data.bin'])
        self.assertEqual(code, 0)
        self.assertIn('Wrote to data.bin', stdout)
        with open('data.bin', 'rb') as f:
            self.assertEqual(f.read(), self.data)

    def test_split_stdin(self):
        code, _, _ = self.run_main(['--no-progress', 'split', '-', 'piped.bin', '3000'],
                                   stdin=io.BytesIO(self.data))
        self.assertEqual(code, 0)
        self.assertEqual(os.path.getsize('piped.bin.3'), 1000)
        self.assertFalse(os.path.exists('piped.bin.4'))

    def test_split_stdin_streamed(self):
        code, _, _ = self.run_main(['--stream', 'split', '-', 'piped.bin', '3000'],
                                   stdin=io.BytesIO(self.data))
        self.assertEqual(code, 0)
        code, _, _ = self.run_main(['join', 'piped.bin', 'joined.bin'])
        with open('joined.bin', 'rb') as f:
            self.assertEqual(f.read(), self.data)

    def test_no_arguments_prints_usage(self):
        code, stdout, stderr = self.run_main([])
        self.assertEqual(code, 1)
        self.assertIn(USAGE, stderr)
        self.assertEqual(stdout, '')

    def test_invalid_command(self):
        code, _, stderr = self.run_main(['merge', 'parts/data.bin'])
        self.assertEqual(code, 1)
        self.assertIn("Invalid command. Use 'split' or 'join'", stderr)

    def test_bad_size_is_reported(self):
        with self.assertLogs('Main', level='ERROR') as logs:
            code, _, _ = self.run_main(['split', 'parts/data.bin', 'abc'])
        self.assertEqual(code, 1)
        self.assertIn('Invalid size argument "abc"', logs.output[0])
        self.assertFalse(os.path.exists('parts/data.bin.0'))

    def test_bad_size_creates_no_log_files(self):
        with self.assertLogs('Main', level='ERROR'):
            code, _, _ = self.run_main(['--log-dir', 'logs', 'split', 'parts/data.bin', '10x'])
        self.assertEqual(code, 1)
        self.assertFalse(os.path.exists('logs'))

    def test_join_with_trailing_separator(self):
        os.makedirs(os.path.join('parts', 'sub'))
        with open(os.path.join('parts', 'sub', '.0'), 'wb') as f:
            f.write(b'abc')
        code, stdout, _ = self.run_main(['--no-progress', 'join', 'parts/sub/'])
        self.assertEqual(code, 0)
        self.assertIn('Wrote to sub', stdout)
        with open('sub', 'rb') as f:
            self.assertEqual(f.read(), b'abc')

    def test_missing_file_is_reported(self):
        with self.assertLogs('Main', level='ERROR') as logs:
            code, _, _ = self.run_main(['split', 'parts/missing.bin', '10'])
        self.assertEqual(code, 1)
        self.assertIn('Failed to split', logs.output[0])

    def test_join_without_parts_succeeds(self):
        code, _, _ = self.run_main(['join', 'parts/none.bin'])
        self.assertEqual(code, 0)
        self.assertEqual(os.path.getsize('none.bin'), 0)

    def test_config_file(self):
        with open('frism.yaml', 'w') as f:
            f.write('strict_size_suffix: false\nprogress: false\n')
        with self.assertLogs('Size', level='WARNING'):
            code, stdout, _ = self.run_main(['--config', 'frism.yaml', 'split', 'parts/data.bin', '5000x'])
        self.assertEqual(code, 0)
        self.assertEqual(stdout, '')
        self.assertEqual(os.path.getsize('parts/data.bin.1'), 5000)

    def test_log_dir(self):
        code, _, _ = self.run_main(['--log-dir', 'logs', '--no-progress', 'split', 'parts/data.bin', '4k'])
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(os.path.join('logs', 'frism_debug.log')))


if __name__ == '__main__':
    unittest.main()
