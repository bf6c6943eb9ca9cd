def swift_name_and_type_declaration(prop):
    declaration = prop["rawDataType"]
    if prop["isCollection"]:
        declaration = "[" + declaration + "]"
    if prop["isOptional"]:
        declaration += "?"
    return prop["name"] + ": " + declaration


log("Registering Swift types")
registerPredefinedTypes(["Bool", "Date", "Decimal", "Double", "Float", "Int", "Long", "String"])
registerFilter("swiftNameAndTypeDeclaration", "swift_name_and_type_declaration", "string")
