"""SDL declaring the directive and the enums and inputs its arguments use."""

from __future__ import annotations

from string import Template

_SDL = Template(
    """
directive @$name(
  # Array validation.
  arrayLength: Int
  arrayMax: Int
  arrayMin: Int
  sort: ${Name}SortInput
  unique: ${Name}UniqueInput

  # Date validation.
  dateGreater: String
  iso: ${Name}Flag
  dateLess: String
  dateMax: String
  dateMin: String
  timestamp: ${Name}TimestampType

  # Number validation.
  greater: Float
  integer: ${Name}Flag
  less: Float
  max: Float
  min: Float
  multiple: Float
  negative: ${Name}Flag
  port: ${Name}Flag
  positive: ${Name}Flag
  precision: Int
  sign: ${Name}Sign
  unsafe: Boolean

  # Object validation.
  and: [String]
  objectLength: Int
  objectMax: Int
  objectMin: Int
  nand: [String]
  or: [String]
  oxor: [String]
  xor: [String]
  with: ${Name}WithInput
  without: ${Name}WithoutInput

  # String validation.
  alphanum: ${Name}Flag
  base64: ${Name}Base64Input
  case: ${Name}CaseDirection
  creditCard: ${Name}Flag
  dataUri: ${Name}DataUriInput
  domain: ${Name}DomainInput
  email: ${Name}EmailInput
  guid: ${Name}GuidInput
  hex: Boolean
  hostname: ${Name}Flag
  ip: ${Name}IpInput
  isoDate: ${Name}Flag
  isoDuration: ${Name}Flag
  length: ${Name}StringLengthInput
  lowercase: ${Name}Flag
  maxLength: ${Name}StringLengthInput
  minLength: ${Name}StringLengthInput
  normalize: ${Name}NormalizeForm
  pattern: ${Name}PatternInput
  regex: ${Name}PatternInput
  token: ${Name}Flag
  trim: Boolean
  uppercase: ${Name}Flag
  uuid: ${Name}GuidInput

  # Helpers.
  arrayPrefs: ${Name}Prefs
  prefs: ${Name}Prefs
  type: ${Name}Types
) on ARGUMENT_DEFINITION | INPUT_FIELD_DEFINITION | INPUT_OBJECT

enum ${Name}Flag { TRUE }
enum ${Name}CaseDirection { UPPER LOWER }
enum ${Name}GuidSeparator { NONE COLON DASH COLON_OR_DASH }
enum ${Name}GuidVersion { UUIDV1 UUIDV2 UUIDV3 UUIDV4 UUIDV5 }
enum ${Name}IpVersion { IPV4 IPV6 IPVFUTURE }
enum ${Name}IpCidr { OPTIONAL REQUIRED FORBIDDEN }
enum ${Name}NormalizeForm { NFC NFD NFKC NFKD }
enum ${Name}Sign { NEGATIVE POSITIVE }
enum ${Name}SortOrder { ASCENDING DESCENDING }
enum ${Name}TimestampType { UNIX JAVASCRIPT }
enum ${Name}Types { DATE }

input ${Name}Base64Input {
  paddingRequired: Boolean
  urlSafe: Boolean
}

input ${Name}DataUriInput {
  paddingRequired: Boolean
}

input ${Name}DomainInput {
  allowUnicode: Boolean
  minDomainSegments: Int
  maxDomainSegments: Int
}

input ${Name}EmailInput {
  allowUnicode: Boolean
  ignoreLength: Boolean
  minDomainSegments: Int
  maxDomainSegments: Int
  multiple: Boolean
  separator: String
}

input ${Name}GuidInput {
  version: [${Name}GuidVersion]
  separator: ${Name}GuidSeparator
}

input ${Name}IpInput {
  version: [${Name}IpVersion]
  cidr: ${Name}IpCidr
}

input ${Name}PatternInput {
  pattern: String!
  flags: String
  name: String
  invert: Boolean
}

input ${Name}Prefs {
  convert: Boolean
}

input ${Name}SortInput {
  order: ${Name}SortOrder
  by: String
}

input ${Name}StringLengthInput {
  limit: Int!
  encoding: String
}

input ${Name}UniqueInput {
  comparator: String
}

input ${Name}WithInput {
  key: String!
  peers: [String]!
}

input ${Name}WithoutInput {
  key: String!
  peers: [String]!
}
"""
)


def create_directive_sdl(name: str = "validate") -> str:
    """
    Return the SDL to prepend to type definitions using ``@<name>``.

    Helper types are prefixed with the capitalised directive name, so
    ``create_directive_sdl("check")`` declares ``@check`` together with
    ``CheckFlag``, ``CheckSortInput`` and so on.
    """
    return _SDL.substitute(name=name, Name=name[:1].upper() + name[1:])
