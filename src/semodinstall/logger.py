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
Change logging for module installation.

Changes are queued while a module is processed and written out in one
go once the outcome is known, to the audit log when the audit
subsystem is available and to syslog otherwise.
"""

import syslog

try:
    import audit
    #test if audit module is enabled
    audit.audit_close(audit.audit_open())

    class logger:

        def __init__(self):
            self.audit_fd = audit.audit_open()
            self.log_change_list = []

        def log_change(self, msg):
            self.log_change_list.append([self.audit_fd, audit.AUDIT_USER_MAC_CONFIG_CHANGE, str(msg), "semodinstall", "", "", ""])

        def commit(self, success):
            for l in self.log_change_list:
                audit.audit_log_user_comm_message(*(l + [success]))
            self.log_change_list = []
except (OSError, ImportError):
    class logger:

        def __init__(self):
            self.log_list = []

        def log_change(self, msg):
            self.log_list.append(" %s" % msg)

        def commit(self, success):
            if success == 1:
                message = "Successful: "
            else:
                message = "Failed: "
            for l in self.log_list:
                syslog.syslog(syslog.LOG_INFO, message + l)
            self.log_list = []


class nulllogger:

    def log_change(self, msg):
        pass

    def commit(self, success):
        pass


class recordlogger:
    """Keep committed changes in memory instead of logging them."""

    def __init__(self):
        self.pending = []
        self.committed = []

    def log_change(self, msg):
        self.pending.append(str(msg))

    def commit(self, success):
        self.committed.extend([(m, success) for m in self.pending])
        self.pending = []
