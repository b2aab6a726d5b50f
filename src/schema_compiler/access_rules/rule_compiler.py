"""Access rule text generation."""

from __future__ import annotations

from dataclasses import dataclass

from schema_compiler.schema_management.schema_models import Entity, SchemaModel

from .policy_classification import AccessPolicy, EntityPolicy, classify_entity_policy

_FIRESTORE_HEADER = """rules_version = '2';
service cloud.firestore {
  match /databases/{database}/documents {
    // Helper functions
    function isAuthenticated() {
      return request.auth != null;
    }

    function isAdmin() {
      return isAuthenticated() && request.auth.token.role == 'admin';
    }

    function isOwner(userId) {
      return isAuthenticated() && request.auth.uid == userId;
    }

"""

_FIRESTORE_FOOTER = "  }\n}\n"

STORAGE_RULES = """rules_version = '2';
service firebase.storage {
  match /b/{bucket}/o {
    // User uploads - users can only access their own files
    match /users/{userId}/{allPaths=**} {
      allow read, write: if request.auth != null && request.auth.uid == userId;
    }

    // Admin uploads - only admins can access
    match /admin/{allPaths=**} {
      allow read, write: if request.auth != null && request.auth.token.role == 'admin';
    }

    // Public files - anyone can read, only admins can write
    match /public/{allPaths=**} {
      allow read: if true;
      allow write: if request.auth != null && request.auth.token.role == 'admin';
    }
  }
}
"""

_BLOCK_INDENT = "      "


@dataclass(frozen=True)
class CompiledRules:
    """Rule sources for the document database and the blob storage."""

    firestore_rules: str
    storage_rules: str


def compile_rules(schema: SchemaModel) -> CompiledRules:
    """Compile database and storage access rules for a schema."""
    blocks = [_render_match_block(entity) for entity in schema.entities]
    firestore_rules = _FIRESTORE_HEADER + "".join(blocks) + _FIRESTORE_FOOTER
    return CompiledRules(firestore_rules=firestore_rules, storage_rules=STORAGE_RULES)


def _render_match_block(entity: Entity) -> str:
    lines = [
        f"    // {entity.name} collection",
        f"    match /{entity.collection}/{{docId}} {{",
    ]
    lines.extend(_BLOCK_INDENT + line for line in _policy_lines(classify_entity_policy(entity)))
    lines.append("    }")
    return "\n".join(lines) + "\n\n"


def _policy_lines(entity_policy: EntityPolicy) -> list[str]:
    if entity_policy.policy is AccessPolicy.OWNERSHIP:
        return [
            "// Admins can read/write all, owners can manage their own",
            "allow read: if isAuthenticated();",
            "allow create: if isAuthenticated();",
            "allow update, delete: if isAdmin() || "
            f"isOwner(resource.data.{entity_policy.owner_field});",
        ]
    if entity_policy.policy is AccessPolicy.USER_PROFILE:
        return [
            "// Users can read their own profile, admins can read/write all",
            "allow read: if isAdmin() || isOwner(docId);",
            "allow create: if isAuthenticated();",
            "allow update: if isAdmin() || "
            "(isOwner(docId) && request.resource.data.role == resource.data.role);",
            "allow delete: if isAdmin();",
        ]
    return [
        "// Default: authenticated users can read, admins can write",
        "allow read: if isAuthenticated();",
        "allow write: if isAdmin();",
    ]
