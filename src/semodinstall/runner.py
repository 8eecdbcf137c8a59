# Copyright (C) 2026 semodinstall contributors
# see file 'COPYING' for use and warranty information
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU General Public License as
# published by the Free Software Foundation; version 2 only
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 59 Temple Place, Suite 330, Boston, MA 02111-1307 USA
#

"""
Running of the external SELinux tools.
"""

import collections
from subprocess import Popen, PIPE

CommandResult = collections.namedtuple("CommandResult", ["returncode", "stdout", "stderr"])


class CommandRunner:
    """Run a command and collect its exit status and output.

    Commands are argument lists and are never passed through a shell.
    An executable that cannot be started is reported the way a shell
    would report it, with exit status 127, so callers only ever have
    to look at the result.
    """
    def run(self, command, cwd=None):
        try:
            p = Popen(command, cwd=cwd, stdout=PIPE, stderr=PIPE, universal_newlines=True)
        except OSError as e:
            return CommandResult(127, "", "%s: %s" % (command[0], e.strerror))
        out, err = p.communicate()
        return CommandResult(p.returncode, out, err)

    @staticmethod
    def format(command):
        return " ".join(command)
