"""Task names, groups and paths shared across ktgate."""

VERIFICATION_GROUP = "Verification"
FORMATTING_GROUP = "Formatting"
HELP_GROUP = "Help"

CHECK_LIFECYCLE_TASK_NAME = "check"
CHECK_PARENT_TASK_NAME = "ktlintCheck"
FORMAT_PARENT_TASK_NAME = "ktlintFormat"
APPLY_TO_IDEA_TASK_NAME = "ktlintApplyToIdea"
APPLY_TO_IDEA_GLOBALLY_TASK_NAME = "ktlintApplyToIdeaGlobally"
INSTALL_GIT_HOOK_CHECK_TASK = "addKtlintCheckGitPreCommitHook"
INSTALL_GIT_HOOK_FORMAT_TASK = "addKtlintFormatGitPreCommitHook"

KOTLIN_EXTENSIONS = ("kt", "kts")
KTLINT_MAIN_CLASS = "com.pinterest.ktlint.Main"
REPORTS_DIR = "reports/ktlint"
INTERMEDIATES_DIR = "ktgate"

CHECK_TASK_DESCRIPTION = "Runs a check against all .kt files to ensure that they are formatted according to ktlint."
FORMAT_TASK_DESCRIPTION = "Runs the ktlint formatter on .kt files to fix formatting violations in place."
CHECK_PARENT_DESCRIPTION = "Runs ktlint on all kotlin sources in this project."
FORMAT_PARENT_DESCRIPTION = "Runs the ktlint formatter on all kotlin sources in this project."
